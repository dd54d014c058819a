from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import add_months, first_of_month
from ..core.constants import DEFAULT_STATISTICS_MONTHS, HOURS_PRECISION
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository
from .model import EmployeeComparison, MonthlyTrend, PayrollSummary, SalaryRecord
from .repository import SalaryRepository

TOP_EMPLOYEES = 10


class SalaryStatisticsService:
    """Read-side aggregates over saved salary rows for the statistics dashboard."""

    def __init__(self, salaries: SalaryRepository, users: UserRepository):
        self._salaries = salaries
        self._users = users

    def _records(self, months: int, today: Optional[date]) -> Sequence[SalaryRecord]:
        if int(months) <= 0:
            raise ValidationError("months must be positive")
        since = add_months(first_of_month(today or date.today()), -int(months))
        return self._salaries.list_since(since)

    def monthly_trends(self, months: int = DEFAULT_STATISTICS_MONTHS, *, today: Optional[date] = None) -> list[MonthlyTrend]:
        buckets: dict[date, dict[str, float]] = {}
        for r in self._records(months, today):
            b = buckets.setdefault(r.month.replace(day=1), {"total": 0.0, "count": 0, "bonus": 0.0})
            b["total"] += r.total_salary
            b["count"] += 1
            b["bonus"] += r.bonus

        return [
            MonthlyTrend(
                month=month,
                label=month.strftime("%b %Y"),
                total=round(b["total"]),
                avg_salary=round(b["total"] / b["count"]),
                total_bonus=round(b["bonus"]),
            )
            for month, b in sorted(buckets.items())
        ]

    def employee_comparisons(
        self,
        months: int = DEFAULT_STATISTICS_MONTHS,
        *,
        today: Optional[date] = None,
        limit: int = TOP_EMPLOYEES,
    ) -> list[EmployeeComparison]:
        latest: dict[int, SalaryRecord] = {}
        for r in self._records(months, today):
            current = latest.get(r.user_id)
            if current is None or r.month > current.month:
                latest[r.user_id] = r

        names = {u.user_id: u.full_name for u in self._users.list_all()}
        rows = [
            EmployeeComparison(
                user_id=r.user_id,
                name=names.get(r.user_id, "N/A"),
                salary=r.base_salary,
                bonus=r.bonus,
                total=r.total_salary,
            )
            for r in latest.values()
        ]
        rows.sort(key=lambda x: x.total, reverse=True)
        return rows[:limit]

    def summary(self, months: int = DEFAULT_STATISTICS_MONTHS, *, today: Optional[date] = None) -> PayrollSummary:
        records = self._records(months, today)
        total = sum(r.total_salary for r in records)
        return PayrollSummary(
            total_payout=round(total, 2),
            avg_salary=round(total / len(records), 2) if records else 0.0,
            employee_count=len({r.user_id for r in records}),
            total_hours=round(sum(r.hours_worked for r in records), HOURS_PRECISION),
        )
