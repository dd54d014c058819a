from datetime import datetime

from src.hr_timesheet.hr_timesheet.attendance.model import AttendanceEvent
from src.hr_timesheet.hr_timesheet.core.enums import EventType, PairingOrder
from src.hr_timesheet.hr_timesheet.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_total_salary_adds_bonus_and_subtracts_deductions():
    calc = StandardPayrollCalculator()
    assert calc.total_salary(base_salary=1000, bonus=150.5, deductions=50.25) == 1100.25


def test_hours_worked_uses_configured_pairing_order():
    events = [
        AttendanceEvent(user_id=1, timestamp=datetime(2024, 5, 2, 12, 0), event_type=EventType.CHECK_OUT),
        AttendanceEvent(user_id=1, timestamp=datetime(2024, 5, 2, 17, 0), event_type=EventType.CHECK_OUT),
        AttendanceEvent(user_id=1, timestamp=datetime(2024, 5, 2, 8, 0), event_type=EventType.CHECK_IN),
    ]
    by_time = StandardPayrollCalculator().hours_worked(events, user_id=1, year_month="2024-05")
    by_input = StandardPayrollCalculator(order=PairingOrder.INPUT).hours_worked(events, user_id=1, year_month="2024-05")

    assert by_time.total_hours == 4.0
    assert by_input.total_hours == 4.0

    events.insert(0, events.pop(1))
    by_input = StandardPayrollCalculator(order=PairingOrder.INPUT).hours_worked(events, user_id=1, year_month="2024-05")
    assert by_input.total_hours == 9.0
