from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import pytest

from src.hr_timesheet.hr_timesheet.core.enums import Role
from src.hr_timesheet.hr_timesheet.core.exceptions import ValidationError
from src.hr_timesheet.hr_timesheet.payroll.model import SalaryRecord
from src.hr_timesheet.hr_timesheet.payroll.statistics import SalaryStatisticsService
from src.hr_timesheet.hr_timesheet.users.model import User

TODAY = date(2024, 6, 10)


@dataclass
class InMemorySalaries:
    records: list[SalaryRecord]

    def list_since(self, since: Optional[date] = None):
        rows = [r for r in self.records if since is None or r.month >= since]
        return sorted(rows, key=lambda r: r.month, reverse=True)


@dataclass
class InMemoryUsers:
    users: list[User]

    def list_all(self):
        return self.users


def _salary(user_id: int, month: date, base: float, bonus: float = 0, hours: float = 0) -> SalaryRecord:
    return SalaryRecord(
        user_id=user_id,
        month=month,
        base_salary=base,
        bonus=bonus,
        deductions=0,
        hours_worked=hours,
        total_salary=base + bonus,
    )


def _user(user_id: int, name: str) -> User:
    return User(
        user_id=user_id, full_name=name, email=f"{user_id}@x", password_hash="x", role=Role.STAFF,
        team_id=None, shift_id=None,
    )


def _service(records: list[SalaryRecord]) -> SalaryStatisticsService:
    users = InMemoryUsers([_user(1, "An"), _user(2, "Binh")])
    return SalaryStatisticsService(InMemorySalaries(records), users)


def test_monthly_trends_are_sorted_and_averaged():
    svc = _service(
        [
            _salary(1, date(2024, 5, 1), 1000, bonus=100),
            _salary(2, date(2024, 5, 1), 2000),
            _salary(1, date(2024, 4, 1), 1000),
            _salary(1, date(2023, 11, 1), 9999),
        ]
    )

    trends = svc.monthly_trends(6, today=TODAY)

    assert [t.label for t in trends] == ["Apr 2024", "May 2024"]
    assert trends[1].total == 3100
    assert trends[1].avg_salary == 1550
    assert trends[1].total_bonus == 100


def test_employee_comparisons_use_latest_month_and_sort_by_total():
    svc = _service(
        [
            _salary(1, date(2024, 4, 1), 5000),
            _salary(1, date(2024, 5, 1), 1000),
            _salary(2, date(2024, 5, 1), 2000),
            _salary(3, date(2024, 5, 1), 500),
        ]
    )

    rows = svc.employee_comparisons(6, today=TODAY)

    assert [(r.user_id, r.total) for r in rows] == [(2, 2000), (1, 1000), (3, 500)]
    assert rows[2].name == "N/A"


def test_employee_comparisons_are_capped():
    svc = _service([_salary(i, date(2024, 5, 1), 100 * i) for i in range(1, 16)])
    rows = svc.employee_comparisons(6, today=TODAY)
    assert len(rows) == 10
    assert rows[0].user_id == 15


def test_summary():
    svc = _service([_salary(1, date(2024, 5, 1), 1000, hours=160), _salary(1, date(2024, 4, 1), 500, hours=80.5)])

    summary = svc.summary(6, today=TODAY)

    assert summary.total_payout == 1500
    assert summary.avg_salary == 750
    assert summary.employee_count == 1
    assert summary.total_hours == 240.5


def test_summary_of_nothing():
    summary = _service([]).summary(6, today=TODAY)
    assert summary.total_payout == 0
    assert summary.avg_salary == 0.0
    assert summary.employee_count == 0


def test_months_must_be_positive():
    with pytest.raises(ValidationError):
        _service([]).monthly_trends(0, today=TODAY)
