"""Builders for unsaved model instances used across tests."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from lifeboard.models import Transaction, TransactionType


def make_transaction(
    txn_type: TransactionType | str,
    amount: str | Decimal,
    category: str,
    when: datetime | str,
    *,
    user_id: UUID | None = None,
    description: str = "",
) -> Transaction:
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    return Transaction(
        id=uuid4(),
        user_id=user_id or uuid4(),
        type=TransactionType(txn_type),
        amount=Decimal(str(amount)),
        category=category,
        description=description,
        date=when,
    )


def auth_headers(user_id: UUID) -> dict[str, str]:
    """Bearer header as the external auth service would issue it."""
    from lifeboard.security import create_access_token

    token = create_access_token(data={"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}
