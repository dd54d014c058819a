from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveDayPart, LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    day_part: LeaveDayPart
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None

    @property
    def days(self) -> float:
        """Working days requested; a half-day leave counts 0.5."""
        if self.day_part != LeaveDayPart.FULL:
            return 0.5
        return float((self.end_date - self.start_date).days + 1)
