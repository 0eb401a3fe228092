"""Date helpers for bucketing and comparing stored timestamps."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Any


def local_now() -> datetime:
    """Return the current time as an aware datetime in server local time."""
    return datetime.now().astimezone()


def to_datetime(value: Any) -> datetime | None:
    """Coerce a stored timestamp into an aware local datetime.

    Accepts Firestore timestamps (``DatetimeWithNanoseconds``), plain
    datetimes (naive values are taken as local time), ISO-8601 strings and
    epoch milliseconds. Anything else yields ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.astimezone()
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000).astimezone()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone()
        except ValueError:
            return None
    # Objects exposing a to_datetime() such as protobuf Timestamps
    converter = getattr(value, "to_datetime", None)
    if callable(converter):
        return to_datetime(converter())
    return None


def local_midnight(day: date) -> datetime:
    """Return 00:00 local time on ``day`` with that day's own UTC offset."""
    return datetime.combine(day, time()).astimezone()


def days_before(midnight: datetime, days: int) -> datetime:
    """Return local midnight ``days`` calendar days before ``midnight``."""
    return local_midnight(midnight.date() - timedelta(days=days))


def start_of_day(now: datetime) -> datetime:
    """Return midnight of the day containing ``now``."""
    return local_midnight(now.date())


def start_of_week(now: datetime) -> datetime:
    """Return midnight of the most recent Sunday (weeks start on Sunday)."""
    days_since_sunday = (now.weekday() + 1) % 7
    return local_midnight(now.date() - timedelta(days=days_since_sunday))


def short_date_label(day: date) -> str:
    """Format a day as a chart label such as ``Oct 18``."""
    return f"{day:%b} {day.day}"
