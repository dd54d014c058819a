from datetime import time

import pytest

from src.hr_timesheet.hr_timesheet.core.exceptions import ValidationError
from src.hr_timesheet.hr_timesheet.shifts.duration import format_shift_duration, shift_duration_hours
from src.hr_timesheet.hr_timesheet.shifts.model import Shift


def test_day_shift():
    assert shift_duration_hours(time(8, 0), time(17, 0)) == 9.0


def test_overnight_shift_wraps_past_midnight():
    assert shift_duration_hours("22:00:00", "06:00:00") == 8.0


def test_identical_start_and_end_is_full_day():
    assert shift_duration_hours("09:00", "09:00") == 24.0


def test_rounded_to_two_decimals():
    # 08:00 -> 16:20 = 8h20m
    assert shift_duration_hours("08:00", "16:20") == 8.33


def test_accepts_minutes_and_seconds_formats():
    assert shift_duration_hours("08:30", "12:00:00") == 3.5


def test_format_drops_trailing_zeros():
    assert format_shift_duration("22:00", "06:00") == "8 h"
    assert format_shift_duration("08:00", "12:30") == "4.5 h"


@pytest.mark.parametrize("value", ["25:00", "8 am", "", None])
def test_invalid_time_raises(value):
    with pytest.raises(ValidationError):
        shift_duration_hours(value, "17:00")


def test_shift_overnight_flag():
    assert Shift(shift_id=1, shift_name="Night", start_time=time(22), end_time=time(6)).is_overnight
    assert not Shift(shift_id=2, shift_name="Day", start_time=time(8), end_time=time(17)).is_overnight
