import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .account_piggy_bank import AccountPiggyBank
    from .piggy_bank_event import PiggyBankEvent


class PiggyBank(Base):
    __tablename__ = "piggy_banks"
    name: Mapped[str] = mapped_column(String)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(32, 12), default=0)
    start_date: Mapped[datetime.date | None] = mapped_column(Date)
    target_date: Mapped[datetime.date | None] = mapped_column(Date)
    currency_id: Mapped[int | None] = mapped_column(ForeignKey("currencies.id"))
    order: Mapped[int] = mapped_column(Integer, default=0)

    account_links: Mapped[list["AccountPiggyBank"]] = relationship(back_populates="piggy_bank")
    events: Mapped[list["PiggyBankEvent"]] = relationship(back_populates="piggy_bank")
