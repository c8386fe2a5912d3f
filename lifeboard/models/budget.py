"""Budget and savings goal models."""

from __future__ import annotations

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from lifeboard.database import Base
from lifeboard.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin


class BudgetPeriod(str, enum.Enum):
    """Budget period."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Budget(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """Spending limit for one category.

    At most one *active* budget per (user, category); enforced by the
    budget service at creation, not by a table constraint.
    """

    __tablename__ = "budgets"

    category: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    period: Mapped[BudgetPeriod] = mapped_column(
        Enum(BudgetPeriod, name="budget_period_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BudgetPeriod.MONTHLY,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class SavingsGoal(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """Named savings target."""

    __tablename__ = "savings_goals"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
