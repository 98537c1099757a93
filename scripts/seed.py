import asyncio
import datetime as dt
import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from piggybank.core.settings import settings
from piggybank.db.repo_holder import RepoHolder
from piggybank.db.utils import create_db_tables

logging.basicConfig(level=logging.INFO)

# --- ДАННЫЕ ДЛЯ ЗАПОЛНЕНИЯ ---
DEFAULT_USERNAME = "demo"

DEFAULT_CURRENCIES = [
    {"code": "EUR", "name": "Euro", "symbol": "€", "decimal_places": 2},
    {"code": "USD", "name": "US Dollar", "symbol": "$", "decimal_places": 2},
    {"code": "JPY", "name": "Japanese Yen", "symbol": "¥", "decimal_places": 0},
]

DEFAULT_RATES = [
    {"from": "USD", "to": "EUR", "rate": "0.92"},
    {"from": "JPY", "to": "EUR", "rate": "0.0062"},
]

DEFAULT_ACCOUNTS = [
    {"name": "Накопительный счёт", "currency": "EUR", "opening": "5000.00"},
    {"name": "Брокерский счёт", "currency": "USD", "opening": "1200.00"},
]

DEFAULT_PIGGY_BANKS = [
    {
        "name": "Отпуск",
        "target_amount": "1200.00",
        "currency": "EUR",
        "months": 12,
        "links": {"Накопительный счёт": "300.00"},
    },
    {
        "name": "Подушка безопасности",
        "target_amount": "6000.00",
        "currency": "EUR",
        "months": 24,
        "links": {"Накопительный счёт": "2500.00", "Брокерский счёт": "400.00"},
    },
    {
        "name": "Без цели",
        "target_amount": "0",
        "currency": "EUR",
        "months": None,
        "links": {"Накопительный счёт": ""},
    },
]


async def create_currencies(repo: RepoHolder) -> dict:
    """Создает валюты и возвращает словарь 'код -> id'."""
    existing_items = {item.code: item.id for item in await repo.currency.get_all()}

    for data in DEFAULT_CURRENCIES:
        if data["code"] not in existing_items:
            new_item = await repo.currency.create(**data)
            existing_items[new_item.code] = new_item.id
            logging.info(f"Created Currency: {data['code']}")

    return existing_items


async def create_rates(repo: RepoHolder, currencies_map: dict, today: dt.date):
    if await repo.exchange_rate.get_all():
        return

    for data in DEFAULT_RATES:
        await repo.exchange_rate.create(
            from_currency_id=currencies_map[data["from"]],
            to_currency_id=currencies_map[data["to"]],
            date=today,
            rate=Decimal(data["rate"]),
        )
        logging.info(f"Created Rate: {data['from']} -> {data['to']} = {data['rate']}")


async def create_accounts(repo: RepoHolder, user_id: int, currencies_map: dict, today: dt.date) -> dict:
    """Создает счета с начальным балансом и возвращает словарь 'имя -> id'."""
    existing_items = {item.name: item.id for item in await repo.account.get_all_active(user_id)}

    for data in DEFAULT_ACCOUNTS:
        if data["name"] in existing_items:
            continue

        account = await repo.account.create(
            name=data["name"],
            owner_id=user_id,
            currency_id=currencies_map[data["currency"]],
        )
        await repo.transaction.create(
            account_id=account.id,
            amount=Decimal(data["opening"]),
            transaction_date=today,
            description="Начальный баланс",
        )
        existing_items[account.name] = account.id
        logging.info(f"Created Account: {data['name']}")

    return existing_items


async def create_piggy_banks(repo: RepoHolder, user_id: int, accounts_map: dict, currencies_map: dict, today: dt.date):
    existing_items = {item.name for item in await repo.piggy_bank.get_piggy_banks(user_id)}

    for order, data in enumerate(DEFAULT_PIGGY_BANKS, start=1):
        if data["name"] in existing_items:
            continue

        target_date = None
        if data["months"]:
            target_date = today.replace(year=today.year + data["months"] // 12, day=1)

        piggy_bank = await repo.piggy_bank.create(
            name=data["name"],
            target_amount=Decimal(data["target_amount"]),
            currency_id=currencies_map[data["currency"]],
            start_date=today,
            target_date=target_date,
            order=order,
        )

        for account_name, amount in data["links"].items():
            await repo.piggy_bank.set_current_amount(
                piggy_bank.id,
                accounts_map[account_name],
                Decimal(amount) if amount else None,
            )

        logging.info(f"Created Piggy Bank: {data['name']}")


async def seed_data():
    logging.info("Starting data seeding...")
    engine = create_async_engine(str(settings.database_url))
    session_pool = async_sessionmaker(engine, expire_on_commit=False)

    await create_db_tables(engine)
    today = dt.date.today()

    async with session_pool() as session:
        repo = RepoHolder(session)

        user = await repo.user.get_or_create(DEFAULT_USERNAME, settings.app_timezone)
        currencies_map = await create_currencies(repo)
        await create_rates(repo, currencies_map, today)
        accounts_map = await create_accounts(repo, user.id, currencies_map, today)
        await create_piggy_banks(repo, user.id, accounts_map, currencies_map, today)

    await engine.dispose()
    logging.info("Data seeding finished.")


if __name__ == "__main__":
    asyncio.run(seed_data())
