"""Calendar windows used to filter transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from lifeboard.config import settings
from lifeboard.services.errors import ValidationError


@dataclass(frozen=True)
class DateWindow:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def utc_bounds(self, tz: ZoneInfo | None = None) -> tuple[datetime, datetime]:
        """Half-open ``[start 00:00, end+1 00:00)`` in ``tz``, expressed in UTC."""
        tz = tz or server_timezone()
        lower = datetime.combine(self.start, time.min, tzinfo=tz)
        upper = datetime.combine(self.end + timedelta(days=1), time.min, tzinfo=tz)
        return lower.astimezone(UTC), upper.astimezone(UTC)


def server_timezone() -> ZoneInfo:
    try:
        return ZoneInfo(settings.timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise RuntimeError(f"Unknown TIMEZONE setting: {settings.timezone!r}") from exc


def server_today() -> date:
    return datetime.now(server_timezone()).date()


def parse_calendar_date(value: str, field_name: str) -> date:
    """Parse an ISO calendar date, accepting a full timestamp and keeping its date part."""
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValidationError(f"Invalid {field_name}: {value!r} is not an ISO date") from exc


def month_window(today: date) -> DateWindow:
    """First through last day of ``today``'s month."""
    first = today.replace(day=1)
    next_month = (first.replace(day=28) + timedelta(days=4)).replace(day=1)
    return DateWindow(first, next_month - timedelta(days=1))


def _checked_window(start: date, end: date) -> DateWindow:
    if start > end:
        raise ValidationError("startDate must be on or before endDate")
    return DateWindow(start, end)


def resolve_window(
    start_date: str | None,
    end_date: str | None,
    *,
    today: date | None = None,
) -> DateWindow:
    """Explicit window when both bounds are given, else the current month."""
    if not start_date and not end_date:
        return month_window(today or server_today())
    if not start_date or not end_date:
        raise ValidationError("startDate and endDate must be provided together")
    return _checked_window(
        parse_calendar_date(start_date, "startDate"),
        parse_calendar_date(end_date, "endDate"),
    )


def require_window(start_date: str | None, end_date: str | None) -> DateWindow:
    """Explicit window with no default; both bounds are mandatory."""
    if not start_date or not end_date:
        raise ValidationError("Start date and end date are required")
    return _checked_window(
        parse_calendar_date(start_date, "startDate"),
        parse_calendar_date(end_date, "endDate"),
    )
