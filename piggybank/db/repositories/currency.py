from sqlalchemy import select

from piggybank.db.models import Currency

from .base import BaseRepository


class CurrencyRepository(BaseRepository[Currency]):
    def __init__(self, session) -> None:
        super().__init__(Currency, session)

    async def get_by_code(self, code: str) -> Currency | None:
        stmt = select(self.model).where(self.model.code == code.upper())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
