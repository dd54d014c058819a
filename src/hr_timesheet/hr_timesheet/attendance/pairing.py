"""Daily pairing of raw check-in/check-out punches into worked hours.

Events are filtered to one user and a half-open time range, grouped by the
calendar day of their own timestamp (no timezone conversion), and each day's
first check-in is paired with its first check-out. The whole range is
materialized before any day is decided.
"""
from __future__ import annotations

from collections import OrderedDict
from datetime import date, datetime, time
from typing import Iterable, Optional, Union

from ..core.constants import SECONDS_PER_HOUR
from ..core.enums import EventType, PairingIssueKind, PairingOrder
from ..core.exceptions import InvalidTimeRange, MissingPairedEvent, ValidationError
from .model import AttendanceEvent, PairingIssue, PairingReport

RangeBound = Union[date, datetime]


def _as_datetime(value: RangeBound) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise ValidationError(f"Invalid range bound: {value!r}")


def _align(ts: datetime, ref: datetime) -> datetime:
    """Make `ts` comparable with `ref` without shifting its wall-clock value."""
    if ts.tzinfo is not None and ref.tzinfo is None:
        return ts.replace(tzinfo=None)
    if ts.tzinfo is None and ref.tzinfo is not None:
        return ts.replace(tzinfo=ref.tzinfo)
    return ts


def _first(day_events: list[AttendanceEvent], event_type: EventType, order: PairingOrder) -> Optional[AttendanceEvent]:
    matching = [e for e in day_events if e.event_type == event_type]
    if not matching:
        return None
    if order == PairingOrder.INPUT:
        return matching[0]
    return min(matching, key=lambda e: _align(e.timestamp, matching[0].timestamp))


def audit_daily_attendance(
    events: Iterable[AttendanceEvent],
    user_id: int,
    range_start: RangeBound,
    range_end: RangeBound,
    *,
    order: PairingOrder = PairingOrder.TIMESTAMP,
    strict: bool = False,
) -> PairingReport:
    """Pair each day's punches and report days that could not be paired cleanly.

    Days with only a check-in or only a check-out count as 0 hours. A check-out
    before its check-in is clamped to 0 hours. With `strict=True` those
    situations raise MissingPairedEvent / InvalidTimeRange instead.
    """
    start = _as_datetime(range_start)
    end = _align(_as_datetime(range_end), start)
    if end < start:
        raise ValidationError("range_end must not precede range_start")

    by_day: "OrderedDict[date, list[AttendanceEvent]]" = OrderedDict()
    for event in events:
        if not isinstance(event, AttendanceEvent):
            raise ValidationError(f"Not an attendance event: {event!r}")
        if event.user_id != user_id:
            continue
        ts = _align(event.timestamp, start)
        if not (start <= ts < end):
            continue
        by_day.setdefault(event.timestamp.date(), []).append(event)

    hours_by_day: dict[date, float] = {}
    issues: list[PairingIssue] = []

    for work_date in sorted(by_day):
        day_events = by_day[work_date]
        check_in = _first(day_events, EventType.CHECK_IN, order)
        check_out = _first(day_events, EventType.CHECK_OUT, order)

        if check_in is None or check_out is None:
            kind = PairingIssueKind.MISSING_CHECK_IN if check_in is None else PairingIssueKind.MISSING_CHECK_OUT
            detail = f"{work_date.isoformat()}: no {'check-in' if check_in is None else 'check-out'} recorded"
            if strict:
                raise MissingPairedEvent(detail)
            issues.append(PairingIssue(work_date=work_date, kind=kind, detail=detail))
            hours_by_day[work_date] = 0.0
            continue

        delta = _align(check_out.timestamp, check_in.timestamp) - check_in.timestamp
        hours = delta.total_seconds() / SECONDS_PER_HOUR
        if hours < 0:
            detail = (
                f"{work_date.isoformat()}: check-out {check_out.timestamp.time()} "
                f"precedes check-in {check_in.timestamp.time()}"
            )
            if strict:
                raise InvalidTimeRange(detail)
            issues.append(PairingIssue(work_date=work_date, kind=PairingIssueKind.NEGATIVE_DURATION, detail=detail))
            hours = 0.0
        hours_by_day[work_date] = hours

    return PairingReport(hours_by_day=hours_by_day, issues=issues)


def pair_daily_attendance(
    events: Iterable[AttendanceEvent],
    user_id: int,
    range_start: RangeBound,
    range_end: RangeBound,
    *,
    order: PairingOrder = PairingOrder.TIMESTAMP,
    strict: bool = False,
) -> dict[date, float]:
    """Worked hours per calendar day for `user_id` in [range_start, range_end)."""
    return audit_daily_attendance(
        events, user_id, range_start, range_end, order=order, strict=strict
    ).hours_by_day
