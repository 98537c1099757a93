"""Shared pytest configuration for the project test suite."""
from __future__ import annotations

import datetime as dt
import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio

# Settings are read at import time; tests never talk to Postgres.
os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_DB", "test")

# Ensure the repository root (which contains the ``piggybank`` package) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from piggybank.db.repo_holder import RepoHolder  # noqa: E402
from piggybank.db.utils import create_db_tables  # noqa: E402

TODAY = dt.date(2026, 1, 15)


@pytest_asyncio.fixture
async def session():
    """In-memory SQLite session with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    await create_db_tables(engine)
    session_pool = async_sessionmaker(engine, expire_on_commit=False)

    async with session_pool() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def repo(session) -> RepoHolder:
    return RepoHolder(session)


@pytest_asyncio.fixture
async def ledger_data(repo: RepoHolder) -> dict:
    """
    Two users, EUR and USD accounts and three piggy banks.

    Alice:
      - savings (EUR): balance 1000.00, funds "Holiday" (300) and "Car" (150)
      - broker (USD): balance 500.00, funds "Car" (50)
    Bob:
      - wallet (EUR): balance 20.00, funds "Bike" (blank amount)
    """
    eur = await repo.currency.create(code="EUR", name="Euro", symbol="€", decimal_places=2)
    usd = await repo.currency.create(code="USD", name="US Dollar", symbol="$", decimal_places=2)
    jpy = await repo.currency.create(code="JPY", name="Japanese Yen", symbol="¥", decimal_places=0)

    alice = await repo.user.create(username="alice", timezone="Europe/Amsterdam")
    bob = await repo.user.create(username="bob", timezone="UTC")

    savings = await repo.account.create(name="Savings", owner_id=alice.id, currency_id=eur.id)
    broker = await repo.account.create(name="Broker", owner_id=alice.id, currency_id=usd.id)
    wallet = await repo.account.create(name="Wallet", owner_id=bob.id, currency_id=eur.id)

    await repo.transaction.create(
        account_id=savings.id, amount=Decimal("1200.00"), transaction_date=dt.date(2025, 12, 1)
    )
    await repo.transaction.create(
        account_id=savings.id, amount=Decimal("-200.00"), transaction_date=dt.date(2026, 1, 10)
    )
    await repo.transaction.create(
        account_id=savings.id, amount=Decimal("-999.00"), transaction_date=dt.date(2026, 2, 1)
    )
    await repo.transaction.create(
        account_id=broker.id, amount=Decimal("500.00"), transaction_date=dt.date(2025, 11, 20)
    )
    await repo.transaction.create(
        account_id=wallet.id, amount=Decimal("20.00"), transaction_date=dt.date(2025, 11, 20)
    )

    holiday = await repo.piggy_bank.create(
        name="Holiday",
        target_amount=Decimal("1200.00"),
        currency_id=eur.id,
        start_date=dt.date(2026, 2, 1),
        target_date=dt.date(2027, 2, 1),
        order=2,
    )
    car = await repo.piggy_bank.create(
        name="Car",
        target_amount=Decimal("5000.00"),
        currency_id=eur.id,
        target_date=None,
        order=1,
    )
    bike = await repo.piggy_bank.create(
        name="Bike",
        target_amount=Decimal("0"),
        currency_id=jpy.id,
        order=1,
    )

    await repo.piggy_bank.set_current_amount(holiday.id, savings.id, Decimal("300.00"))
    await repo.piggy_bank.set_current_amount(car.id, savings.id, Decimal("150.00"))
    await repo.piggy_bank.set_current_amount(car.id, broker.id, Decimal("50.00"))
    await repo.piggy_bank.set_current_amount(bike.id, wallet.id, None)

    return {
        "eur": eur,
        "usd": usd,
        "jpy": jpy,
        "alice": alice,
        "bob": bob,
        "savings": savings,
        "broker": broker,
        "wallet": wallet,
        "holiday": holiday,
        "car": car,
        "bike": bike,
    }
