import datetime as dt
from decimal import Decimal

from sqlalchemy import func, select

from piggybank.db.models import Transaction

from .base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    def __init__(self, session):
        super().__init__(Transaction, session)

    async def get_sum_until(self, account_id: int, date: dt.date) -> Decimal:
        """Считает сумму всех операций по счёту на дату включительно."""
        stmt = select(func.sum(self.model.amount)).where(
            self.model.account_id == account_id,
            self.model.transaction_date <= date,
        )
        result = await self.session.execute(stmt)
        total = result.scalar_one_or_none()

        return Decimal(total) if total is not None else Decimal(0)
