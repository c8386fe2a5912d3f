"""Tests for the habit streak rules."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from lifeboard.services.streaks import is_previous_day, next_streak, streak_from_history

UTC_ZONE = ZoneInfo("UTC")
DAY_1 = datetime(2024, 1, 1, 8, 0, tzinfo=UTC)


def _days(*offsets: float) -> list[datetime]:
    return [DAY_1 + timedelta(days=offset) for offset in offsets]


class TestNextStreak:
    def test_first_completion_starts_at_one(self):
        assert next_streak(0, [], DAY_1, UTC_ZONE) == 1

    def test_next_day_extends(self):
        assert next_streak(1, _days(0), DAY_1 + timedelta(days=1), UTC_ZONE) == 2

    def test_gap_of_two_days_resets(self):
        assert next_streak(5, _days(0), DAY_1 + timedelta(days=2), UTC_ZONE) == 1

    def test_same_day_repeat_resets(self):
        assert next_streak(3, _days(0), DAY_1 + timedelta(hours=4), UTC_ZONE) == 1

    def test_previous_day_is_calendar_based_not_24_hours(self):
        late = datetime(2024, 1, 1, 23, 50, tzinfo=UTC)
        early = datetime(2024, 1, 2, 0, 5, tzinfo=UTC)
        assert next_streak(1, [late], early, UTC_ZONE) == 2

    def test_calendar_day_follows_server_timezone(self):
        # 15:00 UTC and 17:00 UTC straddle midnight in Singapore (UTC+8)
        prev = datetime(2024, 1, 1, 15, 0, tzinfo=UTC)
        now = datetime(2024, 1, 1, 17, 0, tzinfo=UTC)
        assert is_previous_day(prev, now, ZoneInfo("Asia/Singapore"))
        assert not is_previous_day(prev, now, UTC_ZONE)


class TestStreakFromHistory:
    def test_days_one_two_four(self):
        history = _days(0, 1, 3)
        assert [streak_from_history(history[: i + 1], UTC_ZONE) for i in range(3)] == [1, 2, 1]

    def test_empty_history(self):
        assert streak_from_history([], UTC_ZONE) == 0

    @pytest.mark.parametrize(
        "offsets",
        [
            (0, 1, 2, 3),
            (0, 0.1, 1, 2),
            (0, 2, 3, 4, 10, 11),
            (0, 1, 1.5, 2.5, 3.5),
        ],
    )
    def test_incremental_rule_agrees_with_full_recompute(self, offsets):
        history = _days(*offsets)
        streak = 0
        for i, moment in enumerate(history):
            streak = next_streak(streak, history[:i], moment, UTC_ZONE)
            assert streak == streak_from_history(history[: i + 1], UTC_ZONE)
