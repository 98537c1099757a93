import datetime
from decimal import Decimal

from sqlalchemy import (
    Date,
    ForeignKey,
    Numeric,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ExchangeRate(Base):
    """Сколько единиц to_currency стоит одна единица from_currency на дату."""

    __tablename__ = "exchange_rates"
    from_currency_id: Mapped[int] = mapped_column(ForeignKey("currencies.id"))
    to_currency_id: Mapped[int] = mapped_column(ForeignKey("currencies.id"))
    date: Mapped[datetime.date] = mapped_column(Date)
    rate: Mapped[Decimal] = mapped_column(Numeric(32, 12))
