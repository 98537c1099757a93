from sqlalchemy import (
    ForeignKey,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Note(Base):
    """Заметка к копилке или к вложению."""

    __tablename__ = "notes"
    piggy_bank_id: Mapped[int | None] = mapped_column(ForeignKey("piggy_banks.id"))
    attachment_id: Mapped[int | None] = mapped_column(ForeignKey("attachments.id"))
    text: Mapped[str] = mapped_column(Text, default="")
