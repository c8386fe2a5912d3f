"""Pydantic schemas for the dashboard and report endpoints."""

from decimal import Decimal

from lifeboard.schemas.base import CamelModel
from lifeboard.schemas.money import TransactionResponse


class DashboardSummary(CamelModel):
    income: Decimal
    expenses: Decimal
    savings: Decimal


class DashboardResponse(CamelModel):
    """Month-to-date (or custom window) overview."""

    summary: DashboardSummary
    expense_categories: dict[str, Decimal]
    income_categories: dict[str, Decimal]
    transactions: list[TransactionResponse]


class ReportSummary(CamelModel):
    total_income: Decimal
    total_expenses: Decimal
    net: Decimal


class DailyTotals(CamelModel):
    income: Decimal
    expenses: Decimal


class ReportResponse(CamelModel):
    """Category and per-day breakdown over an explicit date range."""

    summary: ReportSummary
    income_by_category: dict[str, Decimal]
    expenses_by_category: dict[str, Decimal]
    daily_data: dict[str, DailyTotals]
