"""Date helpers shared by use cases and adapters."""

import calendar
from datetime import date, datetime


def to_day(value: date | datetime) -> date:
    """Truncate a timestamp to its calendar day.

    Args:
        value: Date or datetime value from a repository row.

    Returns:
        date: Calendar day of the value.
    """
    if isinstance(value, datetime):
        return value.date()
    return value


def day_key(value: date | datetime) -> str:
    """Return the ISO ``YYYY-MM-DD`` key for a date or timestamp."""
    return to_day(value).isoformat()


def subtract_months(value: date, months: int) -> date:
    """Move a date back by whole months, clamping to the month length.

    Args:
        value: Reference date.
        months: Number of months to go back.

    Returns:
        date: Same day-of-month ``months`` earlier, clamped when shorter.
    """
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Return the number of whole days from ``start`` to ``end``."""
    return (to_day(end) - to_day(start)).days


__all__ = ["to_day", "day_key", "subtract_months", "days_between"]
