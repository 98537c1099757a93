from sqlalchemy import (
    ForeignKey,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Attachment(Base):
    __tablename__ = "attachments"
    piggy_bank_id: Mapped[int] = mapped_column(ForeignKey("piggy_banks.id"))
    filename: Mapped[str] = mapped_column(String)
    title: Mapped[str | None]

    def file_name(self) -> str:
        """Имя файла в хранилище загрузок."""
        return f"at-{self.id}.data"
