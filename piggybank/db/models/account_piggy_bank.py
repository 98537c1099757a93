from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    ForeignKey,
    Numeric,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:
    from .account import Account
    from .piggy_bank import PiggyBank


class AccountPiggyBank(Base):
    """Связь копилки со счётом: сколько из накоплений лежит на этом счёте."""

    __tablename__ = "account_piggy_bank"
    __table_args__ = (UniqueConstraint("account_id", "piggy_bank_id"),)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"))
    piggy_bank_id: Mapped[int] = mapped_column(ForeignKey("piggy_banks.id"))
    current_amount: Mapped[Decimal | None] = mapped_column(Numeric(32, 12))

    account: Mapped["Account"] = relationship(back_populates="piggy_bank_links")
    piggy_bank: Mapped["PiggyBank"] = relationship(back_populates="account_links")
