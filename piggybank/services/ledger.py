import datetime as dt
import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Protocol, Sequence

from piggybank.core.money import ZERO, to_money, truncate


@dataclass(frozen=True)
class SavingsGoal:
    id: int
    name: str
    target_amount: Decimal
    target_date: dt.date | None = None
    start_date: dt.date | None = None
    currency_id: int | None = None


@dataclass(frozen=True)
class FundingLink:
    piggy_bank_id: int
    account_id: int
    current_amount: Decimal | str | None


@dataclass(frozen=True)
class AttachmentInfo:
    id: int
    filename: str
    title: str | None
    file_exists: bool
    notes_text: str


class BalanceProvider(Protocol):
    async def balance_as_of(self, account_id: int, date: dt.date, currency_code: str) -> Decimal: ...


class GoalStore(Protocol):
    async def links_for(self, piggy_bank_id: int) -> list[FundingLink]: ...

    async def attachments_for(self, piggy_bank_id: int) -> list[AttachmentInfo]: ...


class Direction(enum.Enum):
    """Направление движения денег относительно копилки."""

    CREDIT = "credit"  # деньги поступают в копилку
    DEBIT = "debit"  # деньги забираются из копилки


def current_amount(links: Iterable[FundingLink], account_id: int | None = None) -> Decimal:
    """Сумма, накопленная в копилке (по всем счетам или по одному)."""
    total = ZERO

    for link in links:
        if account_id is not None and link.account_id != account_id:
            continue
        total += to_money(link.current_amount, blank_as_zero=True)

    return total


def whole_months_between(start: dt.date, end: dt.date) -> int:
    """Количество полных календарных месяцев между датами (со знаком)."""
    months = (end.year - start.year) * 12 + (end.month - start.month)

    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1

    return months


def suggested_monthly_amount(
    goal: SavingsGoal,
    links: Sequence[FundingLink],
    today: dt.date,
    decimal_places: int = 2,
) -> Decimal:
    """
    Сколько нужно откладывать в месяц, чтобы успеть к target_date.

    Деление усекается до decimal_places знаков валюты.
    """
    saved = current_amount(links)
    target = to_money(goal.target_amount)

    if goal.target_date is None or saved >= target:
        return ZERO

    start_date = goal.start_date if goal.start_date is not None and goal.start_date >= today else today
    months = whole_months_between(start_date, goal.target_date)
    remaining = target - saved

    if remaining <= ZERO:
        return ZERO

    # больше месяца в запасе: делим остаток поровну
    if months > 0:
        return truncate(remaining / Decimal(months), decimal_places)

    # меньше месяца: всё сразу
    if months == 0:
        return remaining

    return ZERO


def left_on_account(
    balance: Decimal,
    account_id: int,
    goal_links: Iterable[Sequence[FundingLink]],
) -> Decimal:
    """
    Остаток на счёте за вычетом сумм, отложенных в копилки с этого счёта.

    Результат может быть отрицательным, если в копилки «разложено» больше,
    чем реально лежит на счёте.
    """
    left = to_money(balance)

    for links in goal_links:
        left -= current_amount(links, account_id)

    return left


def clamp_contribution(current, target, proposed) -> Decimal:
    """Ограничивает пополнение свободным местом, а снятие накопленной суммой."""
    current = to_money(current)
    target = to_money(target)
    proposed = to_money(proposed)

    room = target - current
    compare = -current

    # у копилки без цели место не ограничено
    if target == ZERO:
        room = abs(proposed)

    if proposed > ZERO and room < proposed:
        return room

    if proposed < ZERO and compare > proposed:
        return compare

    return proposed


def signed_amount(direction: Direction, amount) -> Decimal:
    amount = abs(to_money(amount))

    if direction is Direction.CREDIT:
        return amount
    if direction is Direction.DEBIT:
        return -amount

    raise ValueError(f"Неизвестное направление: {direction!r}")


def exact_amount(direction: Direction, amount, current, target) -> Decimal:
    """Сколько из суммы операции реально попадёт в копилку (или уйдёт из неё)."""
    return clamp_contribution(current, target, signed_amount(direction, amount))
