from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo

from ..core.constants import END_OF_DAY_TIME, WEEK_START_DAY
from ..core.exceptions import ValidationError

_DATETIME_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str, field_name: str = "Date/time") -> datetime:
    """Parse a local wall-clock date-time (``T`` or space separated).

    The value is kept naive: day boundaries are computed in whatever zone the
    caller meant.
    """
    v = (value or "").strip()
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(v, fmt)
        except ValueError:
            continue
    raise ValidationError(f"{field_name} is not a valid date/time (YYYY-MM-DDTHH:MM)")


def start_of_day(day: date, *, tzinfo: tzinfo | None = None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tzinfo)


def end_of_day(day: date, *, tzinfo: tzinfo | None = None) -> datetime:
    """Last counted instant of the day (23:59:59.999).

    A 16:00 departure is therefore just under 8 hours on its first day.
    """
    return datetime.combine(day, END_OF_DAY_TIME, tzinfo=tzinfo)


def week_start_for(day: date) -> date:
    return day - timedelta(days=(day.weekday() - WEEK_START_DAY) % 7)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_clock_time(value: str, field_name: str) -> time:
    """Parse HH:MM (seconds optional) wall-clock time."""
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be HH:MM")
