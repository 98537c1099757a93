import datetime as dt
import logging
from decimal import Decimal

from piggybank.core.exceptions import MissingDependency
from piggybank.db.repo_holder import RepoHolder


class RepoBalanceProvider:
    """
    Баланс счёта на дату по операциям из БД, в нужной валюте.

    Виртуальный (стартовый) баланс не учитывается: только проведённые операции.
    """

    def __init__(self, repo: RepoHolder, user_id: int) -> None:
        self.repo = repo
        self.user_id = user_id

    async def balance_as_of(self, account_id: int, date: dt.date, currency_code: str | None = None) -> Decimal:
        account = await self.repo.account.get_for_owner(self.user_id, account_id)
        if account is None:
            raise MissingDependency(f"Счёт #{account_id} не найден.")

        balance = await self.repo.transaction.get_sum_until(account_id, date)

        if currency_code is None:
            return balance

        currency = await self.repo.currency.get_by_code(currency_code)
        if currency is None:
            raise MissingDependency(f"Валюта {currency_code} не найдена.")

        if currency.id == account.currency_id:
            return balance

        rate = await self.repo.exchange_rate.get_rate(account.currency_id, currency.id, date)
        if rate is None:
            raise MissingDependency(
                f"Нет курса для пересчёта счёта #{account_id} в {currency.code} на {date.isoformat()}."
            )

        logging.debug(f"Баланс счёта #{account_id}: {balance} по курсу {rate} в {currency.code}")
        return balance * rate
