from sqlalchemy.ext.asyncio import AsyncSession

from piggybank.db.repositories import (
    AccountRepository,
    CurrencyRepository,
    ExchangeRateRepository,
    PiggyBankRepository,
    TransactionRepository,
    UserRepository,
)


class RepoHolder:
    """Этот класс содержит все репозитории для удобной передачи в сервисы."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.user = UserRepository(session)
        self.currency = CurrencyRepository(session)
        self.exchange_rate = ExchangeRateRepository(session)
        self.account = AccountRepository(session)
        self.transaction = TransactionRepository(session)
        self.piggy_bank = PiggyBankRepository(session)
