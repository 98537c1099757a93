import datetime as dt
import logging
from decimal import Decimal

import pytz

from piggybank.core.exceptions import LegacyDisabled, MissingDependency
from piggybank.core.money import format_amount
from piggybank.core.settings import settings
from piggybank.db.models import Currency, PiggyBank
from piggybank.db.repo_holder import RepoHolder
from piggybank.services import ledger
from piggybank.services.balance import RepoBalanceProvider
from piggybank.services.ledger import BalanceProvider
from piggybank.transformers.piggy_bank_event import PiggyBankEventTransformer


def get_today(timezone_name: str | None = None) -> dt.date:
    """Сегодняшняя дата в настроенной таймзоне."""
    timezone_name = timezone_name or settings.app_timezone

    try:
        tz = pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        logging.warning(f"Неизвестная таймзона '{timezone_name}', используем UTC.")
        tz = pytz.utc

    return dt.datetime.now(tz=tz).date()


async def _get_piggy_bank(repo: RepoHolder, user_id: int, piggy_bank_id: int) -> PiggyBank:
    piggy_bank = await repo.piggy_bank.find(user_id, piggy_bank_id)

    if piggy_bank is None:
        raise MissingDependency(f"Копилка #{piggy_bank_id} не найдена.")

    return piggy_bank


async def _get_currency(repo: RepoHolder, currency_id: int | None) -> Currency | None:
    if currency_id is None:
        return None

    return await repo.currency.get_by_id(currency_id)


async def get_current_amount(
    repo: RepoHolder,
    user_id: int,
    piggy_bank_id: int,
    account_id: int | None = None,
) -> Decimal:
    """Сколько накоплено в копилке (по всем счетам или по одному)."""
    piggy_bank = await _get_piggy_bank(repo, user_id, piggy_bank_id)
    links = await repo.piggy_bank.get_links(piggy_bank.id)
    amount = ledger.current_amount(links, account_id)

    logging.debug(f'В копилке #{piggy_bank.id} ("{piggy_bank.name}") накоплено {amount}')
    return amount


async def get_suggested_monthly_amount(
    repo: RepoHolder,
    user_id: int,
    piggy_bank_id: int,
    today: dt.date | None = None,
) -> Decimal:
    """Сколько откладывать в месяц, чтобы успеть к целевой дате."""
    piggy_bank = await _get_piggy_bank(repo, user_id, piggy_bank_id)
    links = await repo.piggy_bank.get_links(piggy_bank.id)
    currency = await _get_currency(repo, piggy_bank.currency_id)
    decimal_places = currency.decimal_places if currency is not None else settings.default_decimal_places

    return ledger.suggested_monthly_amount(
        repo.piggy_bank.to_goal(piggy_bank),
        links,
        today or get_today(),
        decimal_places,
    )


async def left_on_account(
    repo: RepoHolder,
    user_id: int,
    account_id: int,
    as_of: dt.date,
    currency_code: str | None = None,
    balance_provider: BalanceProvider | None = None,
) -> Decimal:
    """
    Сколько на счёте осталось свободных денег, не разложенных по копилкам.

    По умолчанию баланс берётся в валюте самого счёта.
    """
    account = await repo.account.get_for_owner(user_id, account_id)
    if account is None:
        raise MissingDependency(f"Счёт #{account_id} не найден.")

    if currency_code is None:
        currency = await _get_currency(repo, account.currency_id)
        if currency is None:
            raise MissingDependency(f"Валюта счёта #{account_id} не найдена.")
        currency_code = currency.code

    provider = balance_provider or RepoBalanceProvider(repo, user_id)
    balance = await provider.balance_as_of(account_id, as_of, currency_code)
    logging.debug(f'left_on_account("{account.name}", {as_of.isoformat()}): баланс {balance}')

    goal_links = await repo.piggy_bank.get_links_for_account(account_id)
    for piggy_bank_id, links in goal_links.items():
        logging.debug(f"Копилка #{piggy_bank_id}: отложено {ledger.current_amount(links, account_id)}")

    left = ledger.left_on_account(balance, account_id, goal_links.values())
    logging.debug(f"Итоговый остаток: {left}")

    return left


async def get_piggy_banks_with_amount(repo: RepoHolder, user_id: int) -> list[tuple[PiggyBank, str]]:
    """Копилки пользователя с подписью вида `Отпуск (€ 120.00)`."""
    result = []

    for piggy_bank in await repo.piggy_bank.get_piggy_banks(user_id):
        links = await repo.piggy_bank.get_links(piggy_bank.id)
        currency = await _get_currency(repo, piggy_bank.currency_id)
        amount = format_amount(
            ledger.current_amount(links),
            symbol=currency.symbol if currency is not None else None,
            decimal_places=currency.decimal_places if currency is not None else settings.default_decimal_places,
        )
        result.append((piggy_bank, f"{piggy_bank.name} ({amount})"))

    return result


async def get_exact_amount(*args, **kwargs) -> Decimal:
    """Привязка операций к копилкам через повторения больше не поддерживается."""
    raise LegacyDisabled("Повторения копилок больше не поддерживаются.")


async def format_events(repo: RepoHolder, user_id: int, piggy_bank_id: int) -> list[dict]:
    """События копилки в виде словарей для ответа API."""
    piggy_bank = await _get_piggy_bank(repo, user_id, piggy_bank_id)
    currency = await _get_currency(repo, piggy_bank.currency_id)
    transformer = PiggyBankEventTransformer(currency)

    return [transformer.transform(event) for event in await repo.piggy_bank.get_events(piggy_bank.id)]
