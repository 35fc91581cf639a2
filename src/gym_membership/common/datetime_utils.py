from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from ..core.exceptions import ValidationError

_MINUTE = timedelta(minutes=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month.

    Jan 31 + 1 month => Feb 28 (Feb 29 in leap years).
    """
    index = start.month - 1 + int(months)
    year = start.year + index // 12
    month = index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def rounded_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two instants, half a minute rounding up."""
    delta = end - start
    return (delta + _MINUTE / 2) // _MINUTE


def stamp(now: datetime | None = None) -> datetime:
    """Timestamp at the whole-second precision of the DATETIME columns.

    MySQL rounds fractional seconds on insert, so drop them before storing.
    """
    return (now or now_local()).replace(microsecond=0)
