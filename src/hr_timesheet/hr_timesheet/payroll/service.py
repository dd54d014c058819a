from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.model import PairingReport
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import YearMonth, first_of_month, month_bounds
from ..common.validators import require_non_negative
from ..core.constants import HOURS_PRECISION
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalaryRecord
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class SalaryService:
    """Use case: admins save monthly salary rows; hours_worked is derived from attendance."""

    def __init__(
        self,
        salaries: SalaryRepository,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._salaries = salaries
        self._attendance = attendance
        self._users = users
        self._calculator = calculator or StandardPayrollCalculator()

    def month_report(self, user_id: int, year_month: YearMonth) -> PairingReport:
        start, end = month_bounds(year_month)
        events = self._attendance.list_for_user_between(int(user_id), start, end)
        report = self._calculator.hours_worked(events, user_id=int(user_id), year_month=year_month)
        for issue in report.issues:
            logger.warning("Attendance of user %s: %s", user_id, issue.detail)
        return report

    def preview_hours(self, user_id: int, year_month: YearMonth) -> float:
        return round(self.month_report(user_id, year_month).total_hours, HOURS_PRECISION)

    def save_salary(
        self,
        *,
        current_role: Role,
        user_id: int,
        year_month: YearMonth,
        base_salary,
        bonus=0,
        deductions=0,
        notes: Optional[str] = None,
    ) -> SalaryRecord:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can save salaries")
        if not user_id or not year_month or base_salary in (None, ""):
            raise ValidationError("Employee, month and base salary are required")
        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("Employee does not exist")

        month = first_of_month(year_month)
        base = require_non_negative(base_salary, "base_salary")
        bonus_f = require_non_negative(bonus if bonus not in (None, "") else 0, "bonus")
        deductions_f = require_non_negative(deductions if deductions not in (None, "") else 0, "deductions")

        record = SalaryRecord(
            user_id=int(user_id),
            month=month,
            base_salary=base,
            bonus=bonus_f,
            deductions=deductions_f,
            hours_worked=self.preview_hours(int(user_id), month),
            total_salary=self._calculator.total_salary(base_salary=base, bonus=bonus_f, deductions=deductions_f),
            notes=(notes or "").strip() or None,
        )
        self._salaries.upsert(record)
        logger.info(
            "Salary saved for user %s, %s: %.2f h, total %.2f",
            record.user_id, month.strftime("%Y-%m"), record.hours_worked, record.total_salary,
        )

        stored = self._salaries.get_for_user_and_month(record.user_id, month)
        return stored or record

    def list_salaries(self, since: Optional[date] = None) -> list[SalaryRecord]:
        return list(self._salaries.list_since(first_of_month(since) if since else None))
