"""Tests for report building."""

from datetime import date, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from lifeboard.services.errors import ValidationError
from lifeboard.services.periods import DateWindow
from lifeboard.services.reporting import ReportGrouping, build_report, parse_grouping

from tests.factories import make_transaction


class TestBuildReport:
    def test_daily_buckets_and_category_totals(self):
        txns = [
            make_transaction("income", "100", "salary", "2024-01-01T09:00:00"),
            make_transaction("expense", "40", "food", "2024-01-02T12:00:00"),
            make_transaction("expense", "5.50", "food", "2024-01-02T18:30:00"),
        ]

        report = build_report(txns)

        assert report["summary"] == {
            "total_income": Decimal("100.00"),
            "total_expenses": Decimal("45.50"),
            "net": Decimal("54.50"),
        }
        assert report["income_by_category"] == {"salary": Decimal("100.00")}
        assert report["expenses_by_category"] == {"food": Decimal("45.50")}
        assert report["daily_data"] == {
            "2024-01-01": {"income": Decimal("100.00"), "expenses": Decimal("0.00")},
            "2024-01-02": {"income": Decimal("0.00"), "expenses": Decimal("45.50")},
        }

    def test_daily_sums_match_raw_transactions(self):
        txns = [
            make_transaction("income", "3.33", "a", "2024-05-01T01:00:00"),
            make_transaction("income", "3.33", "b", "2024-05-01T02:00:00"),
            make_transaction("expense", "1.11", "c", "2024-05-01T23:59:59"),
        ]
        day = build_report(txns)["daily_data"]["2024-05-01"]
        assert day["income"] + day["expenses"] == Decimal("7.77")

    def test_days_are_sorted(self):
        txns = [
            make_transaction("expense", "1", "x", "2024-03-10"),
            make_transaction("expense", "1", "x", "2024-03-02"),
        ]
        assert list(build_report(txns)["daily_data"]) == ["2024-03-02", "2024-03-10"]

    def test_empty_report(self):
        report = build_report([])
        assert report["summary"]["net"] == Decimal("0.00")
        assert report["daily_data"] == {}


class TestParseGrouping:
    def test_default_is_category(self):
        assert parse_grouping(None) is ReportGrouping.CATEGORY

    def test_day(self):
        assert parse_grouping("day") is ReportGrouping.DAY

    def test_unknown_value(self):
        with pytest.raises(ValidationError, match="groupBy"):
            parse_grouping("week")


class TestDayBucketsTimezone:
    def test_days_follow_the_server_calendar(self):
        # 01:30 UTC on Mar 2 is still Mar 1 in New York
        txns = [make_transaction("expense", "10", "food", "2024-03-02T01:30:00+00:00")]

        report = build_report(txns, ZoneInfo("America/New_York"))

        assert list(report["daily_data"]) == ["2024-03-01"]

    def test_single_day_window_yields_only_that_day(self):
        tz = ZoneInfo("Asia/Tokyo")
        lower, upper = DateWindow(date(2024, 3, 2), date(2024, 3, 2)).utc_bounds(tz)
        txns = [
            make_transaction("income", "5", "tips", lower.isoformat()),
            make_transaction("income", "7", "tips", (upper - timedelta(seconds=1)).isoformat()),
        ]

        report = build_report(txns, tz)

        assert report["daily_data"] == {"2024-03-02": {"income": Decimal("12.00"), "expenses": Decimal("0.00")}}
