"""Money API router: dashboard, reports, transactions, budgets, savings goals."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, status

from lifeboard.deps import CurrentUserId, DbSession
from lifeboard.logger import get_logger
from lifeboard.models import TransactionType
from lifeboard.schemas import (
    BudgetCreate,
    BudgetResponse,
    BudgetUpdate,
    DashboardResponse,
    ReportResponse,
    SavingsGoalCreate,
    SavingsGoalResponse,
    SavingsGoalUpdate,
    TransactionCreate,
    TransactionPage,
    TransactionResponse,
    TransactionUpdate,
)
from lifeboard.services import aggregation, budgets, reporting, transactions
from lifeboard.services.errors import ServiceError
from lifeboard.services.transactions import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from lifeboard.utils import raise_for_service_error

router = APIRouter(prefix="/money", tags=["money"])
logger = get_logger(__name__)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    db: DbSession,
    user_id: CurrentUserId,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
) -> DashboardResponse:
    """Totals, category maps and recent transactions (current month by default)."""
    try:
        payload = await aggregation.get_dashboard(db, user_id, start_date=start_date, end_date=end_date)
    except ServiceError as exc:
        logger.warning("Dashboard request rejected", error=str(exc), start_date=start_date, end_date=end_date)
        raise_for_service_error(exc)
    return DashboardResponse.model_validate(payload, from_attributes=True)


@router.get("/reports", response_model=ReportResponse)
async def get_report(
    db: DbSession,
    user_id: CurrentUserId,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    group_by: str | None = Query(default=None, alias="groupBy"),
) -> ReportResponse:
    """Category and daily breakdown over an explicit date range."""
    try:
        payload = await reporting.generate_report(
            db, user_id, start_date=start_date, end_date=end_date, group_by=group_by
        )
    except ServiceError as exc:
        logger.warning("Report request rejected", error=str(exc), start_date=start_date, end_date=end_date)
        raise_for_service_error(exc)
    return ReportResponse.model_validate(payload)


# --- Transactions ------------------------------------------------------------


@router.get("/transactions", response_model=TransactionPage)
async def list_transactions(
    db: DbSession,
    user_id: CurrentUserId,
    txn_type: TransactionType | None = Query(default=None, alias="type"),
    category: str | None = None,
    start_date: str | None = Query(default=None, alias="startDate"),
    end_date: str | None = Query(default=None, alias="endDate"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> TransactionPage:
    """List transactions, newest first, with optional filters."""
    try:
        items, total, total_pages = await transactions.list_transactions(
            db,
            user_id,
            txn_type=txn_type,
            category=category,
            start_date=start_date,
            end_date=end_date,
            page=page,
            limit=limit,
        )
    except ServiceError as exc:
        raise_for_service_error(exc)
    return TransactionPage(
        transactions=[TransactionResponse.model_validate(txn) for txn in items],
        total=total,
        total_pages=total_pages,
        current_page=page,
    )


@router.post("/transactions", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    data: TransactionCreate,
    db: DbSession,
    user_id: CurrentUserId,
) -> TransactionResponse:
    try:
        txn = await transactions.create_transaction(db, user_id, data)
    except ServiceError as exc:
        raise_for_service_error(exc)
    return TransactionResponse.model_validate(txn)


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: UUID,
    data: TransactionUpdate,
    db: DbSession,
    user_id: CurrentUserId,
) -> TransactionResponse:
    try:
        txn = await transactions.update_transaction(db, user_id, transaction_id, data)
    except ServiceError as exc:
        logger.debug("Transaction update failed", transaction_id=str(transaction_id), error=str(exc))
        raise_for_service_error(exc)
    return TransactionResponse.model_validate(txn)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: UUID,
    db: DbSession,
    user_id: CurrentUserId,
) -> None:
    try:
        await transactions.delete_transaction(db, user_id, transaction_id)
    except ServiceError as exc:
        logger.debug("Transaction not found for deletion", transaction_id=str(transaction_id))
        raise_for_service_error(exc)


# --- Budgets -----------------------------------------------------------------


@router.get("/budgets", response_model=list[BudgetResponse])
async def list_budgets(db: DbSession, user_id: CurrentUserId) -> list[BudgetResponse]:
    """Active budgets only."""
    items = await budgets.list_active_budgets(db, user_id)
    return [BudgetResponse.model_validate(item) for item in items]


@router.post("/budgets", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    data: BudgetCreate,
    db: DbSession,
    user_id: CurrentUserId,
) -> BudgetResponse:
    try:
        budget = await budgets.create_budget(db, user_id, data)
    except ServiceError as exc:
        logger.info("Budget creation rejected", category=data.category, error=str(exc))
        raise_for_service_error(exc)
    return BudgetResponse.model_validate(budget)


@router.put("/budgets/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: UUID,
    data: BudgetUpdate,
    db: DbSession,
    user_id: CurrentUserId,
) -> BudgetResponse:
    try:
        budget = await budgets.update_budget(db, user_id, budget_id, data)
    except ServiceError as exc:
        raise_for_service_error(exc)
    return BudgetResponse.model_validate(budget)


@router.delete("/budgets/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(budget_id: UUID, db: DbSession, user_id: CurrentUserId) -> None:
    try:
        await budgets.delete_budget(db, user_id, budget_id)
    except ServiceError as exc:
        raise_for_service_error(exc)


# --- Savings goals -----------------------------------------------------------


@router.get("/savings-goals", response_model=list[SavingsGoalResponse])
async def list_savings_goals(db: DbSession, user_id: CurrentUserId) -> list[SavingsGoalResponse]:
    items = await budgets.list_savings_goals(db, user_id)
    return [SavingsGoalResponse.model_validate(item) for item in items]


@router.post("/savings-goals", response_model=SavingsGoalResponse, status_code=status.HTTP_201_CREATED)
async def create_savings_goal(
    data: SavingsGoalCreate,
    db: DbSession,
    user_id: CurrentUserId,
) -> SavingsGoalResponse:
    goal = await budgets.create_savings_goal(db, user_id, data)
    return SavingsGoalResponse.model_validate(goal)


@router.put("/savings-goals/{goal_id}", response_model=SavingsGoalResponse)
async def update_savings_goal(
    goal_id: UUID,
    data: SavingsGoalUpdate,
    db: DbSession,
    user_id: CurrentUserId,
) -> SavingsGoalResponse:
    try:
        goal = await budgets.update_savings_goal(db, user_id, goal_id, data)
    except ServiceError as exc:
        raise_for_service_error(exc)
    return SavingsGoalResponse.model_validate(goal)


@router.delete("/savings-goals/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_savings_goal(goal_id: UUID, db: DbSession, user_id: CurrentUserId) -> None:
    try:
        await budgets.delete_savings_goal(db, user_id, goal_id)
    except ServiceError as exc:
        raise_for_service_error(exc)
