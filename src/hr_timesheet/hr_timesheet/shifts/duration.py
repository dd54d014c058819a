from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Union

from ..common.datetime_utils import parse_time_of_day
from ..core.constants import HOURS_PRECISION, SECONDS_PER_HOUR

_REFERENCE_DATE = date(2000, 1, 1)

TimeOfDay = Union[str, time]


def shift_duration_hours(start: TimeOfDay, end: TimeOfDay) -> float:
    """Length of a shift in hours, rounded to 2 decimals.

    Both clock times are anchored on the same reference date; when the end is
    not after the start the shift runs past midnight, so a day is added to the
    end. Identical start and end therefore means a full 24 hour shift.
    """
    start_dt = datetime.combine(_REFERENCE_DATE, parse_time_of_day(start))
    end_dt = datetime.combine(_REFERENCE_DATE, parse_time_of_day(end))

    if end_dt <= start_dt:
        end_dt += timedelta(hours=24)

    hours = (end_dt - start_dt).total_seconds() / SECONDS_PER_HOUR
    return round(hours, HOURS_PRECISION)


def format_shift_duration(start: TimeOfDay, end: TimeOfDay) -> str:
    return f"{shift_duration_hours(start, end):g} h"
