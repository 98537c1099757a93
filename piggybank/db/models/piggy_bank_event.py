import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .piggy_bank import PiggyBank


class PiggyBankEvent(Base):
    __tablename__ = "piggy_bank_events"
    piggy_bank_id: Mapped[int] = mapped_column(ForeignKey("piggy_banks.id"))
    date: Mapped[datetime.date] = mapped_column(Date)
    amount: Mapped[Decimal] = mapped_column(Numeric(32, 12))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    piggy_bank: Mapped["PiggyBank"] = relationship(back_populates="events")
