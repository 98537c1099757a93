from .account import Account
from .account_piggy_bank import AccountPiggyBank
from .attachment import Attachment
from .base import Base
from .currency import Currency
from .exchange_rate import ExchangeRate
from .note import Note
from .piggy_bank import PiggyBank
from .piggy_bank_event import PiggyBankEvent
from .piggy_bank_repetition import PiggyBankRepetition
from .transaction import Transaction
from .user import User

__all__ = [
    "Base",
    "User",
    "Currency",
    "ExchangeRate",
    "Account",
    "Transaction",
    "PiggyBank",
    "AccountPiggyBank",
    "PiggyBankEvent",
    "PiggyBankRepetition",
    "Attachment",
    "Note",
]
