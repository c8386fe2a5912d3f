"""Transaction aggregation: the grouping primitive and the dashboard summary."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any, Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.logger import async_log_timing, get_logger
from lifeboard.models import Transaction, TransactionType
from lifeboard.services.periods import DateWindow, resolve_window

logger = get_logger(__name__)

MONEY_QUANTUM = Decimal("0.01")
RECENT_TRANSACTIONS_LIMIT = 10


class CategorizedAmount(Protocol):
    category: str
    amount: Decimal


def quantize_money(amount: Decimal | int | str) -> Decimal:
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(MONEY_QUANTUM)


def sum_amounts(records: Iterable[CategorizedAmount]) -> Decimal:
    total = Decimal("0")
    for record in records:
        total += record.amount
    return quantize_money(total)


def sum_by_category(records: Iterable[CategorizedAmount]) -> dict[str, Decimal]:
    """Sum amounts per category label.

    Category labels are opaque: no trimming, case folding or enumeration.
    Categories absent from ``records`` are absent from the result.
    """
    totals: dict[str, Decimal] = {}
    for record in records:
        totals[record.category] = totals.get(record.category, Decimal("0")) + record.amount
    return {category: quantize_money(total) for category, total in totals.items()}


def split_by_type(
    transactions: Iterable[Transaction],
) -> tuple[list[Transaction], list[Transaction]]:
    income: list[Transaction] = []
    expenses: list[Transaction] = []
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            income.append(txn)
        else:
            expenses.append(txn)
    return income, expenses


def summarize_transactions(
    transactions: Sequence[Transaction],
    *,
    recent_limit: int = RECENT_TRANSACTIONS_LIMIT,
) -> dict[str, Any]:
    """Build the dashboard payload from an already-filtered transaction set."""
    income_txns, expense_txns = split_by_type(transactions)
    income = sum_amounts(income_txns)
    expenses = sum_amounts(expense_txns)
    recent = sorted(transactions, key=lambda txn: txn.date, reverse=True)[:recent_limit]
    return {
        "summary": {
            "income": income,
            "expenses": expenses,
            "savings": income - expenses,
        },
        "income_categories": sum_by_category(income_txns),
        "expense_categories": sum_by_category(expense_txns),
        "transactions": recent,
    }


async def fetch_transactions(db: AsyncSession, user_id: UUID, window: DateWindow) -> list[Transaction]:
    """All of a user's transactions dated inside ``window``, newest first."""
    lower, upper = window.utc_bounds()
    async with async_log_timing(
        "fetch_transactions",
        logger=logger,
        level="debug",
        start=window.start.isoformat(),
        end=window.end.isoformat(),
    ) as timing:
        result = await db.execute(
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .where(Transaction.date >= lower)
            .where(Transaction.date < upper)
            .order_by(Transaction.date.desc())
        )
        transactions = list(result.scalars().all())
        timing["row_count"] = len(transactions)
    return transactions


async def get_dashboard(
    db: AsyncSession,
    user_id: UUID,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
) -> dict[str, Any]:
    """Dashboard summary for an explicit window or the current month.

    Raises:
        ValidationError: a bound is malformed, missing its pair, or out of order
    """
    window = resolve_window(start_date, end_date)
    transactions = await fetch_transactions(db, user_id, window)
    return summarize_transactions(transactions)
