from datetime import date, datetime, timezone

import pytest

from src.hr_timesheet.hr_timesheet.attendance.model import AttendanceEvent
from src.hr_timesheet.hr_timesheet.attendance.pairing import audit_daily_attendance, pair_daily_attendance
from src.hr_timesheet.hr_timesheet.core.enums import EventType, PairingIssueKind, PairingOrder
from src.hr_timesheet.hr_timesheet.core.exceptions import InvalidTimeRange, MissingPairedEvent, ValidationError

IN = EventType.CHECK_IN
OUT = EventType.CHECK_OUT


def ev(user_id: int, ts: datetime, event_type: EventType) -> AttendanceEvent:
    return AttendanceEvent(user_id=user_id, timestamp=ts, event_type=event_type)


MAY_START = datetime(2024, 5, 1)
MAY_END = datetime(2024, 6, 1)


def test_single_day_pair():
    events = [ev(1, datetime(2024, 5, 2, 9, 0), IN), ev(1, datetime(2024, 5, 2, 17, 30), OUT)]
    assert pair_daily_attendance(events, 1, MAY_START, MAY_END) == {date(2024, 5, 2): 8.5}


def test_check_in_only_counts_zero_and_is_reported():
    events = [ev(1, datetime(2024, 5, 3, 9, 0), IN)]
    report = audit_daily_attendance(events, 1, MAY_START, MAY_END)

    assert report.hours_by_day == {date(2024, 5, 3): 0.0}
    assert [i.kind for i in report.issues] == [PairingIssueKind.MISSING_CHECK_OUT]


def test_check_out_only_counts_zero_and_is_reported():
    events = [ev(1, datetime(2024, 5, 3, 17, 0), OUT)]
    report = audit_daily_attendance(events, 1, MAY_START, MAY_END)

    assert report.hours_by_day == {date(2024, 5, 3): 0.0}
    assert report.issues[0].kind == PairingIssueKind.MISSING_CHECK_IN


def test_check_out_before_check_in_is_clamped_to_zero():
    events = [ev(1, datetime(2024, 5, 4, 8, 0), OUT), ev(1, datetime(2024, 5, 4, 17, 0), IN)]
    report = audit_daily_attendance(events, 1, MAY_START, MAY_END)

    assert report.hours_by_day == {date(2024, 5, 4): 0.0}
    assert report.issues[0].kind == PairingIssueKind.NEGATIVE_DURATION


def test_strict_mode_raises_on_missing_event():
    events = [ev(1, datetime(2024, 5, 3, 9, 0), IN)]
    with pytest.raises(MissingPairedEvent):
        audit_daily_attendance(events, 1, MAY_START, MAY_END, strict=True)


def test_strict_mode_raises_on_negative_duration():
    events = [ev(1, datetime(2024, 5, 4, 8, 0), OUT), ev(1, datetime(2024, 5, 4, 17, 0), IN)]
    with pytest.raises(InvalidTimeRange):
        audit_daily_attendance(events, 1, MAY_START, MAY_END, strict=True)


def test_earliest_punch_of_each_type_wins_regardless_of_input_order():
    events = [
        ev(1, datetime(2024, 5, 6, 18, 0), OUT),
        ev(1, datetime(2024, 5, 6, 13, 0), IN),
        ev(1, datetime(2024, 5, 6, 12, 0), OUT),
        ev(1, datetime(2024, 5, 6, 8, 0), IN),
    ]
    assert pair_daily_attendance(events, 1, MAY_START, MAY_END) == {date(2024, 5, 6): 4.0}


def test_input_order_takes_first_seen_punch():
    events = [
        ev(1, datetime(2024, 5, 6, 18, 0), OUT),
        ev(1, datetime(2024, 5, 6, 13, 0), IN),
        ev(1, datetime(2024, 5, 6, 12, 0), OUT),
        ev(1, datetime(2024, 5, 6, 8, 0), IN),
    ]
    result = pair_daily_attendance(events, 1, MAY_START, MAY_END, order=PairingOrder.INPUT)
    assert result == {date(2024, 5, 6): 5.0}


def test_other_users_are_ignored():
    events = [
        ev(1, datetime(2024, 5, 2, 9, 0), IN),
        ev(2, datetime(2024, 5, 2, 10, 0), OUT),
        ev(1, datetime(2024, 5, 2, 12, 0), OUT),
    ]
    assert pair_daily_attendance(events, 1, MAY_START, MAY_END) == {date(2024, 5, 2): 3.0}


def test_range_is_half_open():
    events = [
        ev(1, datetime(2024, 4, 30, 9, 0), IN),
        ev(1, datetime(2024, 4, 30, 17, 0), OUT),
        ev(1, datetime(2024, 6, 1, 0, 0), IN),
        ev(1, datetime(2024, 6, 1, 8, 0), OUT),
        ev(1, datetime(2024, 5, 1, 0, 0), IN),
        ev(1, datetime(2024, 5, 1, 1, 0), OUT),
    ]
    assert pair_daily_attendance(events, 1, MAY_START, MAY_END) == {date(2024, 5, 1): 1.0}


def test_date_bounds_are_accepted():
    events = [ev(1, datetime(2024, 5, 2, 9, 0), IN), ev(1, datetime(2024, 5, 2, 10, 0), OUT)]
    assert pair_daily_attendance(events, 1, date(2024, 5, 1), date(2024, 6, 1)) == {date(2024, 5, 2): 1.0}


def test_days_without_events_are_absent():
    assert pair_daily_attendance([], 1, MAY_START, MAY_END) == {}


def test_reversed_range_raises():
    with pytest.raises(ValidationError):
        pair_daily_attendance([], 1, MAY_END, MAY_START)


def test_non_event_input_raises():
    with pytest.raises(ValidationError):
        pair_daily_attendance([{"user_id": 1}], 1, MAY_START, MAY_END)


def test_rows_with_zulu_timestamps_are_grouped_by_their_own_day():
    rows = [
        {"user_id": 1, "timestamp": "2024-05-02T09:00:00Z", "type": "check_in"},
        {"user_id": 1, "timestamp": "2024-05-02T17:00:00Z", "type": "check_out"},
    ]
    events = [AttendanceEvent.from_row(r) for r in rows]
    assert pair_daily_attendance(events, 1, MAY_START, MAY_END) == {date(2024, 5, 2): 8.0}


def test_from_row_rejects_unknown_type():
    with pytest.raises(ValidationError):
        AttendanceEvent.from_row({"user_id": 1, "timestamp": "2024-05-02T09:00:00", "type": "lunch"})


def test_report_total_hours():
    events = [
        ev(1, datetime(2024, 5, 2, 9, 0), IN),
        ev(1, datetime(2024, 5, 2, 17, 0), OUT),
        ev(1, datetime(2024, 5, 3, 9, 0), IN),
        ev(1, datetime(2024, 5, 3, 13, 30), OUT),
    ]
    assert audit_daily_attendance(events, 1, MAY_START, MAY_END).total_hours == 12.5


def test_iso_string_timestamps_are_parsed_on_construction():
    events = [
        AttendanceEvent(1, "2024-05-02T09:00:00", IN),
        AttendanceEvent(1, "2024-05-02T17:30:00", "check_out"),
    ]
    assert events[1].event_type == OUT
    assert pair_daily_attendance(events, 1, MAY_START, MAY_END) == {date(2024, 5, 2): 8.5}


@pytest.mark.parametrize("timestamp", ["not-a-time", "", None])
def test_unparseable_timestamp_is_a_validation_error(timestamp):
    with pytest.raises(ValidationError):
        AttendanceEvent(1, timestamp, IN)


def test_unknown_event_type_is_a_validation_error():
    with pytest.raises(ValidationError):
        AttendanceEvent(1, datetime(2024, 5, 2, 9, 0), "lunch")


@pytest.mark.parametrize("field, value", [("user_id", "6f1c-uuid"), ("event_id", "abc")])
def test_from_row_rejects_non_numeric_ids(field, value):
    row = {"user_id": 1, "event_id": 7, "timestamp": "2024-05-02T09:00:00", "type": "check_in", field: value}
    with pytest.raises(ValidationError):
        AttendanceEvent.from_row(row)


def test_aware_start_with_naive_end_is_compared_on_wall_clock():
    start = datetime(2024, 5, 1, tzinfo=timezone.utc)
    events = [ev(1, datetime(2024, 5, 2, 9, 0), IN), ev(1, datetime(2024, 5, 2, 10, 0), OUT)]
    assert pair_daily_attendance(events, 1, start, MAY_END) == {date(2024, 5, 2): 1.0}
