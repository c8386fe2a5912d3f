"""Report generation: category totals and per-day buckets over a date range."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.logger import get_logger, log_timing
from lifeboard.models import Transaction, TransactionType
from lifeboard.models.base import ensure_utc
from lifeboard.services.aggregation import (
    fetch_transactions,
    quantize_money,
    split_by_type,
    sum_by_category,
)
from lifeboard.services.errors import ValidationError
from lifeboard.services.periods import require_window, server_timezone

logger = get_logger(__name__)


class ReportGrouping(str, Enum):
    """Accepted ``groupBy`` values; both breakdowns are always produced."""

    CATEGORY = "category"
    DAY = "day"


def parse_grouping(value: str | None) -> ReportGrouping:
    if not value:
        return ReportGrouping.CATEGORY
    try:
        return ReportGrouping(value)
    except ValueError as exc:
        allowed = ", ".join(g.value for g in ReportGrouping)
        raise ValidationError(f"Unsupported groupBy {value!r}; expected one of: {allowed}") from exc


def day_key(txn: Transaction, tz: ZoneInfo) -> str:
    """Calendar day of the transaction in ``tz``, the same calendar the report window uses."""
    return ensure_utc(txn.date).astimezone(tz).date().isoformat()


def bucket_by_day(
    transactions: Sequence[Transaction], tz: ZoneInfo | None = None
) -> dict[str, dict[str, Decimal]]:
    tz = tz or server_timezone()
    daily: dict[str, dict[str, Decimal]] = {}
    for txn in transactions:
        bucket = daily.setdefault(day_key(txn, tz), {"income": Decimal("0"), "expenses": Decimal("0")})
        if txn.type == TransactionType.INCOME:
            bucket["income"] += txn.amount
        else:
            bucket["expenses"] += txn.amount
    return {
        day: {"income": quantize_money(totals["income"]), "expenses": quantize_money(totals["expenses"])}
        for day, totals in sorted(daily.items())
    }


def build_report(transactions: Sequence[Transaction], tz: ZoneInfo | None = None) -> dict[str, Any]:
    """Assemble the report payload from an already-filtered transaction set.

    Totals are summed from the category maps, which reconcile with the raw
    transactions because every transaction lands in exactly one category.
    """
    income_txns, expense_txns = split_by_type(transactions)
    income_by_category = sum_by_category(income_txns)
    expenses_by_category = sum_by_category(expense_txns)

    total_income = quantize_money(sum(income_by_category.values(), Decimal("0")))
    total_expenses = quantize_money(sum(expenses_by_category.values(), Decimal("0")))

    return {
        "summary": {
            "total_income": total_income,
            "total_expenses": total_expenses,
            "net": total_income - total_expenses,
        },
        "income_by_category": income_by_category,
        "expenses_by_category": expenses_by_category,
        "daily_data": bucket_by_day(transactions, tz),
    }


async def generate_report(
    db: AsyncSession,
    user_id: UUID,
    *,
    start_date: str | None,
    end_date: str | None,
    group_by: str | None = None,
) -> dict[str, Any]:
    """Report over an explicit, mandatory date range.

    Input is validated before any query runs.

    Raises:
        ValidationError: missing or malformed bounds, or unknown ``group_by``
    """
    window = require_window(start_date, end_date)
    grouping = parse_grouping(group_by)

    transactions = await fetch_transactions(db, user_id, window)
    with log_timing(
        "build_report",
        logger=logger,
        user_id=str(user_id),
        group_by=grouping.value,
    ) as timing:
        report = build_report(transactions)
        timing["transaction_count"] = len(transactions)
        timing["day_count"] = len(report["daily_data"])
    return report
