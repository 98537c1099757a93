from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation

from piggybank.core.exceptions import InvalidInput

ZERO = Decimal("0")


def to_money(value, blank_as_zero: bool = False) -> Decimal:
    """
    Приводит значение к Decimal без потери точности.

    Float не принимается: двоичное представление даёт дрейф при сложении.
    Пустая строка и None считаются нулём только при blank_as_zero=True
    (так хранится current_amount у связи копилки со счётом).
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Некорректная сумма: {value!r}")

    if value is None:
        if blank_as_zero:
            return ZERO
        raise InvalidInput("Сумма не указана.")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, str):
        text = value.strip()
        if text == "":
            if blank_as_zero:
                return ZERO
            raise InvalidInput("Сумма не указана.")
        try:
            amount = Decimal(text)
        except InvalidOperation as exc:
            raise InvalidInput(f"Некорректная сумма: {value!r}") from exc
    else:
        raise InvalidInput(f"Некорректная сумма: {value!r}")

    if not amount.is_finite():
        raise InvalidInput(f"Некорректная сумма: {value!r}")

    return amount


def quantum(decimal_places: int) -> Decimal:
    return Decimal(1).scaleb(-decimal_places)


def truncate(amount: Decimal, decimal_places: int) -> Decimal:
    """Отбрасывает лишние знаки после запятой (без округления)."""
    return amount.quantize(quantum(decimal_places), rounding=ROUND_DOWN)


def round_half_up(amount: Decimal, decimal_places: int) -> Decimal:
    """Округляет половину от нуля, как round() в отчётах."""
    return amount.quantize(quantum(decimal_places), rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, symbol: str | None = None, decimal_places: int = 2) -> str:
    """Форматирует сумму для отображения: `€ 12.50`."""
    text = f"{round_half_up(amount, decimal_places):.{decimal_places}f}"

    if symbol:
        return f"{symbol} {text}"

    return text
