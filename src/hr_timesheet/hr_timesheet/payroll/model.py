from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class SalaryRecord:
    """Domain entity: one employee's pay for one month. Unique on (user_id, month)."""

    user_id: int
    month: date
    base_salary: float
    bonus: float
    deductions: float
    hours_worked: float
    total_salary: float
    notes: Optional[str] = None
    salary_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class MonthlyTrend:
    month: date
    label: str
    total: int
    avg_salary: int
    total_bonus: int


@dataclass(frozen=True)
class EmployeeComparison:
    user_id: int
    name: str
    salary: float
    bonus: float
    total: float


@dataclass(frozen=True)
class PayrollSummary:
    total_payout: float
    avg_salary: float
    employee_count: int
    total_hours: float
