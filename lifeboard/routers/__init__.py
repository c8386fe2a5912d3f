"""API routers package."""

from lifeboard.routers import habits, money, notes, pomodoro, tasks

__all__ = [
    "habits",
    "money",
    "notes",
    "pomodoro",
    "tasks",
]
