"""Financial transaction model."""

from __future__ import annotations

import enum
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, DateTime, Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from lifeboard.database import Base
from lifeboard.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin


class TransactionType(str, enum.Enum):
    """Direction of money flow."""

    INCOME = "income"
    EXPENSE = "expense"


class RecurringFrequency(str, enum.Enum):
    """How often a recurring transaction repeats."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Transaction(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """A single dated income or expense record.

    Aggregates (dashboard, reports) are always computed on read; nothing
    derived from transactions is persisted.
    """

    __tablename__ = "transactions"
    __table_args__ = (CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),)

    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, name="transaction_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, default=lambda: datetime.now(UTC)
    )
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurring_frequency: Mapped[RecurringFrequency] = mapped_column(
        Enum(
            RecurringFrequency,
            name="recurring_frequency_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=RecurringFrequency.NONE,
    )
    source: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Transaction {self.type.value} {self.amount} {self.category}>"
