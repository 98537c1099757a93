class PiggyBankError(Exception):
    """Базовая ошибка модуля копилок."""


class MissingDependency(PiggyBankError, LookupError):
    """Источник данных (счёт, курс валют, копилка) не смог вернуть данные."""


class InvalidInput(PiggyBankError, ValueError):
    """Некорректное денежное значение."""


class LegacyDisabled(PiggyBankError, NotImplementedError):
    """Функциональность повторений копилок выведена из эксплуатации."""
