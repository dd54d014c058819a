"""Example: use the service layer directly (no Flask).

Controllers are thin; the salary derivation below is the same call the
/api/salaries/preview endpoint makes.

Run from the repository root: python -m examples.example_usage
"""

import importlib
from datetime import date

from config import get_settings_module

from src.hr_timesheet.hr_timesheet.container import build_container
from src.hr_timesheet.hr_timesheet.shifts.duration import shift_duration_hours


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for shift in container.shift_service.list_shifts():
        print(f"{shift.shift_name}: {shift.duration_hours} h")
    print("22:00 -> 06:00 =", shift_duration_hours("22:00:00", "06:00:00"), "h")

    month = date.today().strftime("%Y-%m")
    print(f"hours worked by user 1 in {month}:", container.salary_service.preview_hours(1, month))


if __name__ == "__main__":
    main()
