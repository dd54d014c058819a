from datetime import date, datetime, timedelta, timezone

import pytest

from src.hr_timesheet.hr_timesheet.common.datetime_utils import (
    add_months,
    first_of_month,
    format_month,
    month_bounds,
    parse_timestamp,
)
from src.hr_timesheet.hr_timesheet.core.exceptions import ValidationError


def test_month_bounds_are_half_open():
    assert month_bounds("2024-02") == (datetime(2024, 2, 1), datetime(2024, 3, 1))


def test_month_bounds_december_rolls_over_year():
    assert month_bounds(date(2024, 12, 15)) == (datetime(2024, 12, 1), datetime(2025, 1, 1))


def test_first_of_month_accepts_full_date_string():
    assert first_of_month("2024-03-17") == date(2024, 3, 1)


@pytest.mark.parametrize("value", ["2024-13", "March", "", None])
def test_first_of_month_rejects_garbage(value):
    with pytest.raises(ValidationError):
        first_of_month(value)


def test_add_months_backwards_across_year():
    assert add_months(date(2024, 2, 1), -3) == date(2023, 11, 1)


def test_format_month():
    assert format_month(date(2024, 5, 20)) == "2024-05-01"


def test_parse_timestamp_keeps_offset():
    ts = parse_timestamp("2024-05-01T23:30:00+07:00")
    assert ts.tzinfo == timezone(timedelta(hours=7))
    assert ts.date() == date(2024, 5, 1)


def test_parse_timestamp_zulu_suffix():
    assert parse_timestamp("2024-05-01T09:00:00Z") == datetime(2024, 5, 1, 9, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["yesterday", "", None, 12])
def test_parse_timestamp_rejects_garbage(value):
    with pytest.raises(ValidationError):
        parse_timestamp(value)
