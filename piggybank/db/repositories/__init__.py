from .account import AccountRepository
from .base import BaseRepository
from .currency import CurrencyRepository
from .exchange_rate import ExchangeRateRepository
from .piggy_bank import PiggyBankRepository
from .transaction import TransactionRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CurrencyRepository",
    "ExchangeRateRepository",
    "AccountRepository",
    "TransactionRepository",
    "PiggyBankRepository",
]
