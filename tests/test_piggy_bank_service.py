import datetime as dt
from decimal import Decimal

import pytest

from piggybank.core.exceptions import LegacyDisabled, MissingDependency
from piggybank.db.models import PiggyBankEvent
from piggybank.services import piggy_banks
from piggybank.services.balance import RepoBalanceProvider
from piggybank.services.ledger import Direction

TODAY = dt.date(2026, 1, 15)


class FixedBalanceProvider:
    def __init__(self, balance: str) -> None:
        self.balance = Decimal(balance)
        self.calls = []

    async def balance_as_of(self, account_id, date, currency_code):
        self.calls.append((account_id, date, currency_code))
        return self.balance


class TestBalanceProvider:
    @pytest.mark.asyncio
    async def test_balance_in_own_currency(self, repo, ledger_data):
        provider = RepoBalanceProvider(repo, ledger_data["alice"].id)

        balance = await provider.balance_as_of(ledger_data["savings"].id, TODAY, "EUR")

        assert balance == Decimal("1000.00")

    @pytest.mark.asyncio
    async def test_later_transactions_are_ignored(self, repo, ledger_data):
        provider = RepoBalanceProvider(repo, ledger_data["alice"].id)

        assert await provider.balance_as_of(ledger_data["savings"].id, dt.date(2026, 2, 1), "EUR") == Decimal("1.00")
        assert await provider.balance_as_of(ledger_data["savings"].id, dt.date(2025, 1, 1), "EUR") == Decimal("0")

    @pytest.mark.asyncio
    async def test_converts_with_latest_rate(self, repo, ledger_data):
        usd, eur = ledger_data["usd"], ledger_data["eur"]
        await repo.exchange_rate.create(
            from_currency_id=usd.id, to_currency_id=eur.id, date=dt.date(2025, 12, 1), rate=Decimal("0.90")
        )
        await repo.exchange_rate.create(
            from_currency_id=usd.id, to_currency_id=eur.id, date=dt.date(2026, 1, 1), rate=Decimal("0.92")
        )
        await repo.exchange_rate.create(
            from_currency_id=usd.id, to_currency_id=eur.id, date=dt.date(2026, 2, 1), rate=Decimal("0.50")
        )
        provider = RepoBalanceProvider(repo, ledger_data["alice"].id)

        balance = await provider.balance_as_of(ledger_data["broker"].id, TODAY, "EUR")

        assert balance == Decimal("460.00")

    @pytest.mark.asyncio
    async def test_uses_inverse_rate(self, repo, ledger_data):
        usd, eur = ledger_data["usd"], ledger_data["eur"]
        await repo.exchange_rate.create(
            from_currency_id=eur.id, to_currency_id=usd.id, date=dt.date(2026, 1, 1), rate=Decimal("1.25")
        )
        provider = RepoBalanceProvider(repo, ledger_data["alice"].id)

        balance = await provider.balance_as_of(ledger_data["broker"].id, TODAY, "EUR")

        assert balance == Decimal("400.00")

    @pytest.mark.asyncio
    async def test_missing_rate_is_an_error(self, repo, ledger_data):
        provider = RepoBalanceProvider(repo, ledger_data["alice"].id)

        with pytest.raises(MissingDependency):
            await provider.balance_as_of(ledger_data["broker"].id, TODAY, "EUR")

    @pytest.mark.asyncio
    async def test_unknown_currency_is_an_error(self, repo, ledger_data):
        provider = RepoBalanceProvider(repo, ledger_data["alice"].id)

        with pytest.raises(MissingDependency):
            await provider.balance_as_of(ledger_data["savings"].id, TODAY, "XYZ")

    @pytest.mark.asyncio
    async def test_foreign_account_is_an_error(self, repo, ledger_data):
        provider = RepoBalanceProvider(repo, ledger_data["bob"].id)

        with pytest.raises(MissingDependency):
            await provider.balance_as_of(ledger_data["savings"].id, TODAY, "EUR")


class TestPiggyBankService:
    @pytest.mark.asyncio
    async def test_current_amount(self, repo, ledger_data):
        alice = ledger_data["alice"]
        car, broker = ledger_data["car"], ledger_data["broker"]

        assert await piggy_banks.get_current_amount(repo, alice.id, car.id) == Decimal("200.00")
        assert await piggy_banks.get_current_amount(repo, alice.id, car.id, broker.id) == Decimal("50.00")

    @pytest.mark.asyncio
    async def test_current_amount_of_unknown_piggy_bank(self, repo, ledger_data):
        with pytest.raises(MissingDependency):
            await piggy_banks.get_current_amount(repo, ledger_data["bob"].id, ledger_data["car"].id)

    @pytest.mark.asyncio
    async def test_suggested_monthly_amount(self, repo, ledger_data):
        alice, holiday = ledger_data["alice"], ledger_data["holiday"]

        # с 01.02.2026 до 01.02.2027: (1200 - 300) / 12
        result = await piggy_banks.get_suggested_monthly_amount(repo, alice.id, holiday.id, today=TODAY)

        assert str(result) == "75.00"

    @pytest.mark.asyncio
    async def test_suggested_monthly_amount_without_target_date(self, repo, ledger_data):
        alice, car = ledger_data["alice"], ledger_data["car"]

        result = await piggy_banks.get_suggested_monthly_amount(repo, alice.id, car.id, today=TODAY)

        assert str(result) == "0"

    @pytest.mark.asyncio
    async def test_left_on_account(self, repo, ledger_data):
        alice, savings = ledger_data["alice"], ledger_data["savings"]

        # 1000.00 - 300.00 (Holiday) - 150.00 (Car)
        left = await piggy_banks.left_on_account(repo, alice.id, savings.id, TODAY)

        assert left == Decimal("550.00")

    @pytest.mark.asyncio
    async def test_left_on_account_can_be_negative(self, repo, ledger_data):
        alice, savings = ledger_data["alice"], ledger_data["savings"]

        left = await piggy_banks.left_on_account(repo, alice.id, savings.id, dt.date(2026, 2, 1))

        assert left == Decimal("-449.00")

    @pytest.mark.asyncio
    async def test_left_on_account_asks_for_account_currency(self, repo, ledger_data):
        alice, broker = ledger_data["alice"], ledger_data["broker"]
        provider = FixedBalanceProvider("75.00")

        left = await piggy_banks.left_on_account(repo, alice.id, broker.id, TODAY, balance_provider=provider)

        assert provider.calls == [(broker.id, TODAY, "USD")]
        assert left == Decimal("25.00")

    @pytest.mark.asyncio
    async def test_left_on_account_currency_override(self, repo, ledger_data):
        alice, savings = ledger_data["alice"], ledger_data["savings"]
        provider = FixedBalanceProvider("450.00")

        left = await piggy_banks.left_on_account(
            repo, alice.id, savings.id, TODAY, currency_code="JPY", balance_provider=provider
        )

        assert provider.calls == [(savings.id, TODAY, "JPY")]
        assert left == Decimal("0.00")

    @pytest.mark.asyncio
    async def test_left_on_unknown_account(self, repo, ledger_data):
        with pytest.raises(MissingDependency):
            await piggy_banks.left_on_account(repo, ledger_data["bob"].id, ledger_data["savings"].id, TODAY)

    @pytest.mark.asyncio
    async def test_piggy_banks_with_amount(self, repo, ledger_data):
        labels = await piggy_banks.get_piggy_banks_with_amount(repo, ledger_data["alice"].id)

        assert [label for _, label in labels] == ["Car (€ 200.00)", "Holiday (€ 300.00)"]

    @pytest.mark.asyncio
    async def test_piggy_banks_with_amount_uses_currency_places(self, repo, ledger_data):
        labels = await piggy_banks.get_piggy_banks_with_amount(repo, ledger_data["bob"].id)

        assert [label for _, label in labels] == ["Bike (¥ 0)"]

    @pytest.mark.asyncio
    async def test_exact_amount_is_end_of_life(self):
        with pytest.raises(LegacyDisabled):
            await piggy_banks.get_exact_amount(Direction.CREDIT, Decimal("10"))

    @pytest.mark.asyncio
    async def test_format_events(self, repo, ledger_data):
        alice, holiday = ledger_data["alice"], ledger_data["holiday"]
        stamp = dt.datetime(2026, 1, 2, 9, 30)
        repo.session.add(
            PiggyBankEvent(
                piggy_bank_id=holiday.id,
                date=dt.date(2026, 1, 2),
                amount=Decimal("12.345"),
                created_at=stamp,
                updated_at=stamp,
            )
        )
        await repo.session.commit()

        events = await piggy_banks.format_events(repo, alice.id, holiday.id)

        assert len(events) == 1
        assert events[0]["amount"] == "12.35"
        assert events[0]["created_at"] == "2026-01-02T09:30:00"
        assert events[0]["links"] == [{"rel": "self", "uri": f"/piggy_bank_events/{events[0]['id']}"}]


def test_get_today_falls_back_to_utc_for_unknown_timezone():
    assert isinstance(piggy_banks.get_today("Mars/Olympus_Mons"), dt.date)
