import datetime as dt
import logging
from decimal import Decimal

from sqlalchemy import select

from piggybank.db.models import ExchangeRate

from .base import BaseRepository


class ExchangeRateRepository(BaseRepository[ExchangeRate]):
    def __init__(self, session):
        super().__init__(ExchangeRate, session)

    async def _latest(self, from_currency_id: int, to_currency_id: int, date: dt.date) -> ExchangeRate | None:
        stmt = (
            select(self.model)
            .where(
                self.model.from_currency_id == from_currency_id,
                self.model.to_currency_id == to_currency_id,
                self.model.date <= date,
            )
            .order_by(self.model.date.desc(), self.model.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_rate(self, from_currency_id: int, to_currency_id: int, date: dt.date) -> Decimal | None:
        """
        Возвращает последний известный курс на дату.

        Если есть только обратная пара, курс переворачивается.
        """
        if from_currency_id == to_currency_id:
            return Decimal(1)

        direct = await self._latest(from_currency_id, to_currency_id, date)
        if direct is not None:
            return Decimal(direct.rate)

        inverse = await self._latest(to_currency_id, from_currency_id, date)
        if inverse is not None and inverse.rate:
            logging.debug(f"Курс {from_currency_id}->{to_currency_id} найден только как обратный.")
            return Decimal(1) / Decimal(inverse.rate)

        return None
