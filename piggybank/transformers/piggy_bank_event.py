from decimal import Decimal

from piggybank.core.money import round_half_up
from piggybank.db.models import Currency, PiggyBankEvent

DEFAULT_DECIMAL_PLACES = 2


class PiggyBankEventTransformer:
    """Превращает событие копилки в словарь для ответа API."""

    def __init__(self, currency: Currency | None = None) -> None:
        self.decimal_places = currency.decimal_places if currency is not None else DEFAULT_DECIMAL_PLACES

    def transform(self, event: PiggyBankEvent) -> dict:
        amount = round_half_up(Decimal(event.amount), self.decimal_places)

        return {
            "id": int(event.id),
            "created_at": event.created_at.isoformat() if event.created_at else None,
            "updated_at": event.updated_at.isoformat() if event.updated_at else None,
            "amount": f"{amount:.{self.decimal_places}f}",
            "links": [
                {
                    "rel": "self",
                    "uri": f"/piggy_bank_events/{event.id}",
                },
            ],
        }
