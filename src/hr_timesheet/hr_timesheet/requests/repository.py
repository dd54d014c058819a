from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveDayPart, LeaveType, RequestStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        day_part: LeaveDayPart,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        """Newest first."""
        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Move a pending request to `status`; False when it is no longer pending."""
        raise NotImplementedError
