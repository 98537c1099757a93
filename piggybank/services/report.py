import datetime as dt
from decimal import Decimal

from piggybank.core.money import ZERO, format_amount
from piggybank.core.settings import settings
from piggybank.db.models import User
from piggybank.db.repo_holder import RepoHolder
from piggybank.services import ledger
from piggybank.services.piggy_banks import get_today


def _progress_bar(saved: Decimal, target: Decimal) -> tuple[str, Decimal]:
    progress_percent = (saved / target * 100) if target > ZERO else Decimal(0)
    filled_blocks = max(0, min(10, int(progress_percent / 10)))
    empty_blocks = 10 - filled_blocks

    return "🟩" * filled_blocks + "⬜️" * empty_blocks, progress_percent


async def prepare_piggy_bank_report(repo: RepoHolder, user: User, today: dt.date | None = None) -> str:
    """Готовит отчет о прогрессе по всем копилкам пользователя."""
    today = today or get_today(user.timezone)
    piggy_banks = await repo.piggy_bank.get_piggy_banks(user.id)

    if not piggy_banks:
        return f"У пользователя {user.username} пока нет копилок."

    report_lines = [f"🐷 **Копилки ({user.username}) на {today.isoformat()}**"]

    for piggy_bank in piggy_banks:
        links = await repo.piggy_bank.get_links(piggy_bank.id)
        currency = await repo.currency.get_by_id(piggy_bank.currency_id) if piggy_bank.currency_id else None
        symbol = currency.symbol if currency else None
        places = currency.decimal_places if currency else settings.default_decimal_places

        goal = repo.piggy_bank.to_goal(piggy_bank)
        saved = ledger.current_amount(links)
        progress_bar, progress_percent = _progress_bar(saved, goal.target_amount)
        suggested = ledger.suggested_monthly_amount(goal, links, today, places)

        report_lines.extend([
            f"\n🎯 «{piggy_bank.name}»",
            f"{progress_bar} {progress_percent:.1f}%",
            f"Накоплено: `{format_amount(saved, symbol, places)}`",
            f"Цель: `{format_amount(goal.target_amount, symbol, places)}`",
            f"Осталось: `{format_amount(max(goal.target_amount - saved, ZERO), symbol, places)}`",
        ])

        if goal.target_date is not None:
            report_lines.append(
                f"До {goal.target_date.isoformat()} откладывать в месяц: `{format_amount(suggested, symbol, places)}`"
            )

    return "\n".join(report_lines)
