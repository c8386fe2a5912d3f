from lifeboard.schemas.analytics import (
    DailyTotals,
    DashboardResponse,
    DashboardSummary,
    ReportResponse,
    ReportSummary,
)
from lifeboard.schemas.base import BaseResponse, CamelModel
from lifeboard.schemas.habit import (
    HabitAnalysisResponse,
    HabitCompletionStats,
    HabitCreate,
    HabitMotivationResponse,
    HabitRecommendation,
    HabitResponse,
    HabitUpdate,
    Reminder,
)
from lifeboard.schemas.money import (
    BudgetCreate,
    BudgetResponse,
    BudgetUpdate,
    SavingsGoalCreate,
    SavingsGoalResponse,
    SavingsGoalUpdate,
    TransactionCreate,
    TransactionPage,
    TransactionResponse,
    TransactionUpdate,
)
from lifeboard.schemas.productivity import (
    NoteIn,
    NoteResponse,
    PomodoroCreate,
    PomodoroResponse,
    PomodoroStats,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)

__all__ = [
    "BaseResponse",
    "BudgetCreate",
    "BudgetResponse",
    "BudgetUpdate",
    "CamelModel",
    "DailyTotals",
    "DashboardResponse",
    "DashboardSummary",
    "HabitAnalysisResponse",
    "HabitCompletionStats",
    "HabitCreate",
    "HabitMotivationResponse",
    "HabitRecommendation",
    "HabitResponse",
    "HabitUpdate",
    "NoteIn",
    "NoteResponse",
    "PomodoroCreate",
    "PomodoroResponse",
    "PomodoroStats",
    "Reminder",
    "ReportResponse",
    "ReportSummary",
    "SavingsGoalCreate",
    "SavingsGoalResponse",
    "SavingsGoalUpdate",
    "TaskCreate",
    "TaskResponse",
    "TaskUpdate",
    "TransactionCreate",
    "TransactionPage",
    "TransactionResponse",
    "TransactionUpdate",
]
