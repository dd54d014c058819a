from __future__ import annotations

from datetime import date, datetime, time
from typing import Union

from ..core.exceptions import ValidationError

YearMonth = Union[str, date]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-8601 timestamp as stored by the row store.

    The offset, if any, is kept as-is: no conversion to local time is done,
    so `.date()` is the calendar day of the timestamp's own representation.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp: {value!r}") from exc


def parse_time_of_day(value: Union[str, time]) -> time:
    """Parse "HH:MM" or "HH:MM:SS" into a wall-clock time."""
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid time of day: {value!r}")

    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(value.strip(), fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time of day: {value!r}")


def first_of_month(year_month: YearMonth) -> date:
    """Normalize "YYYY-MM", "YYYY-MM-DD" or a date to the first day of its month."""
    if isinstance(year_month, datetime):
        return year_month.date().replace(day=1)
    if isinstance(year_month, date):
        return year_month.replace(day=1)
    if isinstance(year_month, str):
        text = year_month.strip()
        for fmt in ("%Y-%m", "%Y-%m-%d"):
            try:
                return datetime.strptime(text, fmt).date().replace(day=1)
            except ValueError:
                continue
    raise ValidationError(f"Invalid month: {year_month!r}")


def add_months(day: date, months: int) -> date:
    """Shift a first-of-month date by a number of months (negative allowed)."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_bounds(year_month: YearMonth) -> tuple[datetime, datetime]:
    """Half-open range [first of month 00:00, first of next month 00:00)."""
    start = first_of_month(year_month)
    end = add_months(start, 1)
    return datetime.combine(start, time.min), datetime.combine(end, time.min)


def format_month(day: date) -> str:
    """Month key as written to salary rows: YYYY-MM-01."""
    return day.replace(day=1).strftime("%Y-%m-%d")
