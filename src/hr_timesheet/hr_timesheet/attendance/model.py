from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_timestamp
from ..core.enums import EventType, PairingIssueKind
from ..core.exceptions import ValidationError


def _parse_event_type(value: Any) -> EventType:
    try:
        return EventType(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid attendance type: {value!r}") from exc


def _parse_id(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from exc


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one check-in or check-out punch. Never updated once written.

    `timestamp` may be given as an ISO-8601 string and `event_type` as its
    string value; both are parsed on construction.
    """

    user_id: int
    timestamp: datetime
    event_type: EventType
    location: Optional[str] = None
    notes: Optional[str] = None
    event_id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "timestamp", parse_timestamp(self.timestamp))
        object.__setattr__(self, "event_type", _parse_event_type(self.event_type))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AttendanceEvent":
        """Parse a raw row ({user_id, timestamp, type, location, notes}) at the boundary."""
        if row.get("user_id") in (None, ""):
            raise ValidationError("Attendance row without user_id")
        event_id = row.get("event_id")

        return cls(
            event_id=_parse_id(event_id, "event_id") if event_id is not None else None,
            user_id=_parse_id(row["user_id"], "user_id"),
            timestamp=row.get("timestamp"),
            event_type=row.get("type"),
            location=row.get("location"),
            notes=row.get("notes"),
        )


@dataclass(frozen=True)
class PairingIssue:
    work_date: date
    kind: PairingIssueKind
    detail: str


@dataclass(frozen=True)
class PairingReport:
    """Hours per calendar day plus the days that needed attention."""

    hours_by_day: dict[date, float]
    issues: list[PairingIssue] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(self.hours_by_day.values())
