"""Habit streak rules.

A streak counts consecutive calendar days with a completion. Calendar days
are taken in the server timezone. Two completions on the same day do not
extend a streak; the second one restarts it at 1.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from lifeboard.models.base import ensure_utc
from lifeboard.services.periods import server_timezone


def _local_day(moment: datetime, tz: ZoneInfo) -> date:
    return ensure_utc(moment).astimezone(tz).date()


def is_previous_day(prev: datetime, now: datetime, tz: ZoneInfo | None = None) -> bool:
    tz = tz or server_timezone()
    return _local_day(prev, tz) == _local_day(now, tz) - timedelta(days=1)


def next_streak(
    current_streak: int,
    history: Sequence[datetime],
    now: datetime,
    tz: ZoneInfo | None = None,
) -> int:
    """Streak after appending ``now`` to ``history`` (``history`` excludes ``now``)."""
    if not history:
        return 1
    if is_previous_day(history[-1], now, tz):
        return current_streak + 1
    return 1


def streak_from_history(history: Sequence[datetime], tz: ZoneInfo | None = None) -> int:
    """Recompute the streak from the full completion history."""
    tz = tz or server_timezone()
    streak = 0
    previous: datetime | None = None
    for moment in history:
        streak = next_streak(streak, [previous] if previous else [], moment, tz)
        previous = moment
    return streak
