"""Tests for calendar window resolution."""

from datetime import UTC, date, datetime
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from lifeboard.services.errors import ValidationError
from lifeboard.services.periods import (
    DateWindow,
    month_window,
    parse_calendar_date,
    require_window,
    resolve_window,
)


class TestMonthWindow:
    def test_mid_month_in_thirty_day_month(self):
        window = month_window(date(2024, 4, 15))
        assert window == DateWindow(date(2024, 4, 1), date(2024, 4, 30))

    def test_leap_february(self):
        assert month_window(date(2024, 2, 10)).end == date(2024, 2, 29)

    def test_december_rolls_into_next_year(self):
        assert month_window(date(2023, 12, 31)) == DateWindow(date(2023, 12, 1), date(2023, 12, 31))


class TestResolveWindow:
    def test_defaults_to_current_month(self):
        window = resolve_window(None, None, today=date(2024, 6, 15))
        assert window == DateWindow(date(2024, 6, 1), date(2024, 6, 30))

    def test_explicit_bounds(self):
        window = resolve_window("2024-01-01", "2024-01-31")
        assert window == DateWindow(date(2024, 1, 1), date(2024, 1, 31))

    def test_accepts_timestamps_and_keeps_date_part(self):
        window = resolve_window("2024-01-01T10:00:00Z", "2024-01-31T00:00:00")
        assert window == DateWindow(date(2024, 1, 1), date(2024, 1, 31))

    def test_single_bound_is_rejected(self):
        with pytest.raises(ValidationError):
            resolve_window("2024-01-01", None)

    def test_reversed_bounds_are_rejected(self):
        with pytest.raises(ValidationError, match="on or before"):
            resolve_window("2024-02-01", "2024-01-01")

    def test_malformed_date(self):
        with pytest.raises(ValidationError, match="startDate"):
            resolve_window("not-a-date", "2024-01-01")


class TestRequireWindow:
    @pytest.mark.parametrize("start,end", [(None, None), ("2024-01-01", None), (None, "2024-01-31")])
    def test_missing_bounds(self, start, end):
        with pytest.raises(ValidationError, match="Start date and end date are required"):
            require_window(start, end)

    def test_same_day_window(self):
        assert require_window("2024-03-05", "2024-03-05") == DateWindow(date(2024, 3, 5), date(2024, 3, 5))


class TestUtcBounds:
    def test_utc_window_is_half_open_over_whole_days(self):
        lower, upper = DateWindow(date(2024, 1, 1), date(2024, 1, 31)).utc_bounds(ZoneInfo("UTC"))
        assert lower == datetime(2024, 1, 1, tzinfo=UTC)
        assert upper == datetime(2024, 2, 1, tzinfo=UTC)

    def test_server_timezone_shifts_bounds(self):
        lower, _ = DateWindow(date(2024, 1, 1), date(2024, 1, 1)).utc_bounds(ZoneInfo("Asia/Singapore"))
        assert lower == datetime(2023, 12, 31, 16, 0, tzinfo=UTC)

    def test_unknown_timezone_setting(self):
        with patch("lifeboard.services.periods.settings") as mock_settings:
            mock_settings.timezone = "Mars/Olympus"
            with pytest.raises(RuntimeError, match="TIMEZONE"):
                DateWindow(date(2024, 1, 1), date(2024, 1, 1)).utc_bounds()


def test_parse_calendar_date_names_field():
    with pytest.raises(ValidationError, match="endDate"):
        parse_calendar_date("31/01/2024", "endDate")
