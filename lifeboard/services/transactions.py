"""Transaction management service."""

from __future__ import annotations

import math
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.logger import get_logger
from lifeboard.models import Transaction, TransactionType
from lifeboard.models.base import ensure_utc
from lifeboard.schemas.money import TransactionCreate, TransactionUpdate
from lifeboard.services.errors import NotFoundError, ValidationError
from lifeboard.services.periods import DateWindow, require_window

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


async def create_transaction(db: AsyncSession, user_id: UUID, data: TransactionCreate) -> Transaction:
    """Record a transaction dated ``data.date`` (now when omitted).

    Raises:
        ValidationError: type, amount or category is missing
    """
    if data.type is None or data.amount is None or not data.category:
        raise ValidationError("Type, amount and category are required")

    txn = Transaction(
        user_id=user_id,
        type=data.type,
        amount=data.amount,
        category=data.category,
        description=data.description,
        date=ensure_utc(data.date) if data.date else datetime.now(UTC),
        is_recurring=data.is_recurring,
        recurring_frequency=data.recurring_frequency,
        source=data.source,
    )
    db.add(txn)
    await db.commit()
    await db.refresh(txn)
    logger.info("Transaction created", transaction_id=str(txn.id), type=txn.type.value)
    return txn


def _list_window(start_date: str | None, end_date: str | None) -> DateWindow | None:
    if not start_date and not end_date:
        return None
    return require_window(start_date, end_date)


async def list_transactions(
    db: AsyncSession,
    user_id: UUID,
    *,
    txn_type: TransactionType | None = None,
    category: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> tuple[list[Transaction], int, int]:
    """Page of a user's transactions, newest first.

    Returns:
        (transactions, total matching rows, total pages)

    Raises:
        ValidationError: bad paging values or date bounds
    """
    if page < 1:
        raise ValidationError("page must be >= 1")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    window = _list_window(start_date, end_date)

    base_query = select(Transaction).where(Transaction.user_id == user_id)
    if txn_type:
        base_query = base_query.where(Transaction.type == txn_type)
    if category:
        base_query = base_query.where(Transaction.category == category)
    if window:
        lower, upper = window.utc_bounds()
        base_query = base_query.where(Transaction.date >= lower).where(Transaction.date < upper)

    count_query = select(func.count()).select_from(base_query.subquery())
    total = (await db.execute(count_query)).scalar() or 0

    query = (
        base_query.order_by(Transaction.date.desc(), Transaction.created_at.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    result = await db.execute(query)
    return list(result.scalars().all()), total, math.ceil(total / limit)


async def get_transaction(db: AsyncSession, user_id: UUID, transaction_id: UUID) -> Transaction:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id).where(Transaction.user_id == user_id)
    )
    txn = result.scalar_one_or_none()
    if not txn:
        raise NotFoundError("Transaction", transaction_id)
    return txn


async def update_transaction(
    db: AsyncSession, user_id: UUID, transaction_id: UUID, data: TransactionUpdate
) -> Transaction:
    txn = await get_transaction(db, user_id, transaction_id)
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("category") is not None:
        update_data["category"] = update_data["category"].strip()
        if not update_data["category"]:
            raise ValidationError("category must not be blank")
    if update_data.get("date") is not None:
        update_data["date"] = ensure_utc(update_data["date"])

    for field, value in update_data.items():
        # Required columns keep their value when the client sends null
        if value is None and field not in {"description", "source"}:
            continue
        setattr(txn, field, "" if value is None else value)

    await db.commit()
    await db.refresh(txn)
    return txn


async def delete_transaction(db: AsyncSession, user_id: UUID, transaction_id: UUID) -> None:
    txn = await get_transaction(db, user_id, transaction_id)
    await db.delete(txn)
    await db.commit()
    logger.info("Transaction deleted", transaction_id=str(transaction_id))
