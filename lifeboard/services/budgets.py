"""Budget and savings goal service."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.logger import get_logger
from lifeboard.models import Budget, SavingsGoal
from lifeboard.schemas.money import (
    BudgetCreate,
    BudgetUpdate,
    SavingsGoalCreate,
    SavingsGoalUpdate,
)
from lifeboard.services.errors import ConflictError, NotFoundError, ValidationError

logger = get_logger(__name__)


async def _active_budget_for(db: AsyncSession, user_id: UUID, category: str) -> Budget | None:
    result = await db.execute(
        select(Budget)
        .where(Budget.user_id == user_id)
        .where(Budget.category == category)
        .where(Budget.active.is_(True))
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create_budget(db: AsyncSession, user_id: UUID, data: BudgetCreate) -> Budget:
    """Create an active budget.

    Raises:
        ValidationError: category or amount is missing
        ConflictError: an active budget already exists for the category
    """
    if not data.category or data.amount is None:
        raise ValidationError("Category and amount are required")
    if await _active_budget_for(db, user_id, data.category):
        raise ConflictError(f"Budget for category {data.category!r} already exists")

    budget = Budget(
        user_id=user_id,
        category=data.category,
        amount=data.amount,
        period=data.period,
        active=True,
    )
    db.add(budget)
    await db.commit()
    await db.refresh(budget)
    logger.info("Budget created", budget_id=str(budget.id), category=budget.category)
    return budget


async def list_active_budgets(db: AsyncSession, user_id: UUID) -> list[Budget]:
    result = await db.execute(
        select(Budget)
        .where(Budget.user_id == user_id)
        .where(Budget.active.is_(True))
        .order_by(Budget.category)
    )
    return list(result.scalars().all())


async def get_budget(db: AsyncSession, user_id: UUID, budget_id: UUID) -> Budget:
    result = await db.execute(select(Budget).where(Budget.id == budget_id).where(Budget.user_id == user_id))
    budget = result.scalar_one_or_none()
    if not budget:
        raise NotFoundError("Budget", budget_id)
    return budget


async def update_budget(db: AsyncSession, user_id: UUID, budget_id: UUID, data: BudgetUpdate) -> Budget:
    budget = await get_budget(db, user_id, budget_id)
    update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
    if "category" in update_data:
        update_data["category"] = update_data["category"].strip()

    category = update_data.get("category", budget.category)
    active = update_data.get("active", budget.active)
    if active and (category != budget.category or not budget.active):
        existing = await _active_budget_for(db, user_id, category)
        if existing and existing.id != budget.id:
            raise ConflictError(f"Budget for category {category!r} already exists")

    for field, value in update_data.items():
        setattr(budget, field, value)

    await db.commit()
    await db.refresh(budget)
    return budget


async def delete_budget(db: AsyncSession, user_id: UUID, budget_id: UUID) -> None:
    budget = await get_budget(db, user_id, budget_id)
    await db.delete(budget)
    await db.commit()


async def create_savings_goal(db: AsyncSession, user_id: UUID, data: SavingsGoalCreate) -> SavingsGoal:
    goal = SavingsGoal(
        user_id=user_id,
        name=data.name,
        target_amount=data.target_amount,
        target_date=data.target_date,
    )
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal


async def list_savings_goals(db: AsyncSession, user_id: UUID) -> list[SavingsGoal]:
    result = await db.execute(
        select(SavingsGoal).where(SavingsGoal.user_id == user_id).order_by(SavingsGoal.created_at.desc())
    )
    return list(result.scalars().all())


async def get_savings_goal(db: AsyncSession, user_id: UUID, goal_id: UUID) -> SavingsGoal:
    result = await db.execute(
        select(SavingsGoal).where(SavingsGoal.id == goal_id).where(SavingsGoal.user_id == user_id)
    )
    goal = result.scalar_one_or_none()
    if not goal:
        raise NotFoundError("Savings goal", goal_id)
    return goal


async def update_savings_goal(
    db: AsyncSession, user_id: UUID, goal_id: UUID, data: SavingsGoalUpdate
) -> SavingsGoal:
    goal = await get_savings_goal(db, user_id, goal_id)
    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        # target_date may be cleared; the other fields are required
        if value is None and field != "target_date":
            continue
        setattr(goal, field, value)

    await db.commit()
    await db.refresh(goal)
    return goal


async def delete_savings_goal(db: AsyncSession, user_id: UUID, goal_id: UUID) -> None:
    goal = await get_savings_goal(db, user_id, goal_id)
    await db.delete(goal)
    await db.commit()
