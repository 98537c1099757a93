from sqlalchemy import select

from piggybank.db.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session) -> None:
        super().__init__(User, session)

    async def get_or_create(self, username: str, timezone: str = "UTC") -> User:
        """Находит пользователя по имени или создает нового."""
        user = await self.get_by_username(username)

        if user is None:
            user = await self.create(username=username, timezone=timezone)

        return user

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(self.model).where(self.model.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
