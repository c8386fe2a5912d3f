"""Services package."""

from lifeboard.services import (
    aggregation,
    budgets,
    habit_insights,
    habits,
    productivity,
    reporting,
    transactions,
)
from lifeboard.services.ai_client import ChatCompletionClient, TextGenerator, get_text_generator
from lifeboard.services.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from lifeboard.services.streaks import next_streak, streak_from_history

__all__ = [
    "ChatCompletionClient",
    "ConflictError",
    "DependencyError",
    "NotFoundError",
    "ServiceError",
    "TextGenerator",
    "ValidationError",
    "aggregation",
    "budgets",
    "get_text_generator",
    "habit_insights",
    "habits",
    "next_streak",
    "productivity",
    "reporting",
    "streak_from_history",
    "transactions",
]
