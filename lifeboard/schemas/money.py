"""Pydantic schemas for transactions, budgets and savings goals."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import Field, field_validator

from lifeboard.models import BudgetPeriod, RecurringFrequency, TransactionType
from lifeboard.schemas.base import BaseResponse, CamelModel

# Fits Numeric(12, 2): at most ten integer digits and whole cents
Money = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]
PositiveMoney = Annotated[Decimal, Field(gt=0, max_digits=12, decimal_places=2)]
Category = Annotated[str, Field(min_length=1, max_length=100)]
# Presence is checked by the services so a missing value is a 400, not a 422
OptionalCategory = Annotated[str | None, Field(max_length=100)]


def _strip(value: str | None) -> str | None:
    return value.strip() if value is not None else None


class TransactionCreate(CamelModel):
    """Schema for creating a transaction.

    ``type``, ``amount`` and ``category`` are required; the service rejects
    them when absent or blank.
    """

    type: TransactionType | None = None
    amount: Money | None = None
    category: OptionalCategory = None
    description: Annotated[str, Field(max_length=500)] = ""
    date: datetime | None = None
    is_recurring: bool = False
    recurring_frequency: RecurringFrequency = RecurringFrequency.NONE
    source: Annotated[str, Field(max_length=255)] = ""

    @field_validator("category")
    @classmethod
    def strip_category(cls, value: str | None) -> str | None:
        return _strip(value)


class TransactionUpdate(CamelModel):
    """Schema for updating a transaction (all fields optional)."""

    type: TransactionType | None = None
    amount: Money | None = None
    category: Category | None = None
    description: Annotated[str | None, Field(max_length=500)] = None
    date: datetime | None = None
    is_recurring: bool | None = None
    recurring_frequency: RecurringFrequency | None = None
    source: Annotated[str | None, Field(max_length=255)] = None


class TransactionResponse(BaseResponse):
    id: UUID
    user_id: UUID
    type: TransactionType
    amount: Decimal
    category: str
    description: str
    date: datetime
    is_recurring: bool
    recurring_frequency: RecurringFrequency
    source: str
    created_at: datetime
    updated_at: datetime


class TransactionPage(CamelModel):
    """Paginated transaction listing."""

    transactions: list[TransactionResponse]
    total: int
    total_pages: int
    current_page: int


class BudgetCreate(CamelModel):
    category: OptionalCategory = None
    amount: Money | None = None
    period: BudgetPeriod = BudgetPeriod.MONTHLY

    @field_validator("category")
    @classmethod
    def strip_category(cls, value: str | None) -> str | None:
        return _strip(value)


class BudgetUpdate(CamelModel):
    category: Category | None = None
    amount: Money | None = None
    period: BudgetPeriod | None = None
    active: bool | None = None


class BudgetResponse(BaseResponse):
    id: UUID
    user_id: UUID
    category: str
    amount: Decimal
    period: BudgetPeriod
    active: bool
    created_at: datetime
    updated_at: datetime


class SavingsGoalCreate(CamelModel):
    name: Annotated[str, Field(min_length=1, max_length=255)]
    target_amount: PositiveMoney
    target_date: date | None = None


class SavingsGoalUpdate(CamelModel):
    name: Annotated[str | None, Field(min_length=1, max_length=255)] = None
    target_amount: PositiveMoney | None = None
    target_date: date | None = None


class SavingsGoalResponse(BaseResponse):
    id: UUID
    user_id: UUID
    name: str
    target_amount: Decimal
    target_date: date | None
    created_at: datetime
    updated_at: datetime
