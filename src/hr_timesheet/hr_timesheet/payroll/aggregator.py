from __future__ import annotations

from typing import Iterable

from ..attendance.model import AttendanceEvent, PairingReport
from ..attendance.pairing import audit_daily_attendance
from ..common.datetime_utils import YearMonth, month_bounds
from ..core.constants import HOURS_PRECISION
from ..core.enums import PairingOrder


def monthly_attendance_report(
    events: Iterable[AttendanceEvent],
    user_id: int,
    year_month: YearMonth,
    *,
    order: PairingOrder = PairingOrder.TIMESTAMP,
) -> PairingReport:
    start, end = month_bounds(year_month)
    return audit_daily_attendance(events, user_id, start, end, order=order)


def monthly_hours_worked(
    events: Iterable[AttendanceEvent],
    user_id: int,
    year_month: YearMonth,
    *,
    order: PairingOrder = PairingOrder.TIMESTAMP,
) -> float:
    """Hours worked by `user_id` in the calendar month, rounded to 2 decimals.

    Recomputed from the events on every call; nothing is cached or written.
    """
    report = monthly_attendance_report(events, user_id, year_month, order=order)
    return round(report.total_hours, HOURS_PRECISION)
