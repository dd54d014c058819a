from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EventType
from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        """Events of one user with start <= timestamp < end, oldest first."""
        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def create_event(
        self,
        *,
        user_id: int,
        timestamp: datetime,
        event_type: EventType,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError
