from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...attendance.model import AttendanceEvent, PairingReport
from ...common.datetime_utils import YearMonth


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def hours_worked(self, events: Iterable[AttendanceEvent], *, user_id: int, year_month: YearMonth) -> PairingReport:
        raise NotImplementedError

    @abstractmethod
    def total_salary(self, *, base_salary: float, bonus: float, deductions: float) -> float:
        raise NotImplementedError
