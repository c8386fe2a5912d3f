"""SQLAlchemy models package."""

from lifeboard.models.ai_interaction import AIInteraction, AIInteractionType
from lifeboard.models.budget import Budget, BudgetPeriod, SavingsGoal
from lifeboard.models.habit import Habit, HabitFrequency, HabitType
from lifeboard.models.productivity import Note, PomodoroSession, PomodoroType, Task
from lifeboard.models.transaction import RecurringFrequency, Transaction, TransactionType
from lifeboard.models.user import User

__all__ = [
    "AIInteraction",
    "AIInteractionType",
    "Budget",
    "BudgetPeriod",
    "Habit",
    "HabitFrequency",
    "HabitType",
    "Note",
    "PomodoroSession",
    "PomodoroType",
    "RecurringFrequency",
    "SavingsGoal",
    "Task",
    "Transaction",
    "TransactionType",
    "User",
]
