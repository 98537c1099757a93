import datetime
from decimal import Decimal

from sqlalchemy import (
    Date,
    ForeignKey,
    Numeric,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class PiggyBankRepetition(Base):
    """Устаревшая модель повторений копилки. Только для чтения."""

    __tablename__ = "piggy_bank_repetitions"
    piggy_bank_id: Mapped[int] = mapped_column(ForeignKey("piggy_banks.id"))
    start_date: Mapped[datetime.date | None] = mapped_column(Date)
    target_date: Mapped[datetime.date | None] = mapped_column(Date)
    current_amount: Mapped[Decimal] = mapped_column(Numeric(32, 12), default=0)
