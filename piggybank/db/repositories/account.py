from sqlalchemy import select

from piggybank.db.models import Account

from .base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    def __init__(self, session) -> None:
        super().__init__(Account, session)

    async def get_for_owner(self, owner_id: int, account_id: int) -> Account | None:
        """Находит счёт, только если он принадлежит пользователю."""
        stmt = select(self.model).where(
            self.model.id == account_id,
            self.model.owner_id == owner_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all_active(self, owner_id: int) -> list[Account]:
        """Возвращает все активные счета пользователя."""
        stmt = select(self.model).where(
            self.model.owner_id == owner_id,
            self.model.is_active.is_(True),
        ).order_by(self.model.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
