"""
Aggregate figures over a user's ledgers: overall totals, per-month
breakdowns (by transaction date) and the latest transactions (by creation
time) across both kinds.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional

from utils.schemas import MonthSummary, SummaryOut, TransactionOut


def _aware(value: Optional[datetime]) -> datetime:
    # SQLite hands back naive timestamps; they were written as UTC.
    if value is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _month_key(value: datetime) -> str:
    return _aware(value).strftime("%Y-%m")


def _month(key: str, income: float, expenses: float) -> MonthSummary:
    return MonthSummary(
        month=key,
        income=round(income, 2),
        expenses=round(expenses, 2),
        balance=round(income - expenses, 2),
    )


def summarize(
    incomes: Iterable[TransactionOut],
    expenses: Iterable[TransactionOut],
    today: Optional[date] = None,
    recent: int = 3,
) -> SummaryOut:
    incomes = list(incomes)
    expenses = list(expenses)
    today = today or datetime.now(timezone.utc).date()

    by_month: Dict[str, List[float]] = defaultdict(lambda: [0.0, 0.0])
    for tx in incomes:
        by_month[_month_key(tx.date)][0] += tx.amount
    for tx in expenses:
        by_month[_month_key(tx.date)][1] += tx.amount

    total_income = sum(tx.amount for tx in incomes)
    total_expenses = sum(tx.amount for tx in expenses)

    current_key = today.strftime("%Y-%m")
    current = by_month.get(current_key, [0.0, 0.0])

    history = sorted(
        incomes + expenses,
        key=lambda tx: _aware(tx.created_at),
        reverse=True,
    )

    return SummaryOut(
        total_income=round(total_income, 2),
        total_expenses=round(total_expenses, 2),
        total_balance=round(total_income - total_expenses, 2),
        current_month=_month(current_key, *current),
        months=[_month(key, *by_month[key]) for key in sorted(by_month, reverse=True)],
        recent_transactions=history[:recent],
    )
