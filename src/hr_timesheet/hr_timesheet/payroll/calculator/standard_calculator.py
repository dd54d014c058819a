from __future__ import annotations

from typing import Iterable

from .base import PayrollCalculator
from ..aggregator import monthly_attendance_report
from ...attendance.model import AttendanceEvent, PairingReport
from ...common.datetime_utils import YearMonth
from ...core.enums import PairingOrder


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: paired daily hours over the month; total = base + bonus - deductions."""

    def __init__(self, *, order: PairingOrder = PairingOrder.TIMESTAMP):
        self._order = order

    def hours_worked(self, events: Iterable[AttendanceEvent], *, user_id: int, year_month: YearMonth) -> PairingReport:
        return monthly_attendance_report(events, user_id, year_month, order=self._order)

    def total_salary(self, *, base_salary: float, bonus: float, deductions: float) -> float:
        return round(float(base_salary) + float(bonus) - float(deductions), 2)
