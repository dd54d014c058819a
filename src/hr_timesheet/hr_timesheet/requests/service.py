from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import REQUEST_LIST_LIMIT
from ..core.enums import LeaveDayPart, LeaveType, RequestStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveRequestService:
    """Use case: employees file leave requests, admins approve or reject them once."""

    def __init__(self, requests: LeaveRequestRepository, users: UserRepository):
        self._requests = requests
        self._users = users

    @staticmethod
    def _parse_choice(enum_cls, value, field_name: str):
        try:
            return enum_cls(value)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Invalid {field_name}: {value!r}") from exc

    def create_leave(
        self,
        *,
        user_id: int,
        leave_type,
        day_part=LeaveDayPart.FULL,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise ValidationError("Employee does not exist")

        kind = self._parse_choice(LeaveType, leave_type, "leave type")
        part = self._parse_choice(LeaveDayPart, day_part or LeaveDayPart.FULL, "day part")
        if end_date < start_date:
            raise ValidationError("End date must not precede start date")
        if part != LeaveDayPart.FULL and end_date != start_date:
            raise ValidationError("A half-day leave must start and end on the same day")

        request_id = self._requests.create_leave(
            user_id=int(user_id),
            leave_type=kind,
            day_part=part,
            start_date=start_date,
            end_date=end_date,
            reason=require_non_empty(reason, "Reason"),
        )
        logger.info("Leave request %s filed by user %s (%s, %s..%s)", request_id, user_id, kind.value, start_date, end_date)
        return request_id

    def approve_leave(self, *, current_role: Role, admin_user_id: int, request_id: int, admin_note: str = "") -> None:
        self._decide(current_role, admin_user_id, request_id, RequestStatus.APPROVED, admin_note)

    def reject_leave(self, *, current_role: Role, admin_user_id: int, request_id: int, admin_note: str = "") -> None:
        self._decide(current_role, admin_user_id, request_id, RequestStatus.REJECTED, admin_note)

    def _decide(
        self,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        status: RequestStatus,
        admin_note: Optional[str],
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can decide leave requests")

        req = self._requests.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError(f"Leave request is already {req.status.value}")

        decided = self._requests.decide_leave(
            request_id=int(request_id),
            status=status,
            decided_by=int(admin_user_id),
            admin_note=(admin_note or "").strip() or None,
        )
        if not decided:
            raise ValidationError("Leave request was decided concurrently")
        logger.info("Leave request %s %s by user %s", request_id, status.value, admin_user_id)

    def get_leave(self, request_id: int) -> LeaveRequest:
        req = self._requests.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        return req

    def list_my_requests(self, *, user_id: int) -> list[LeaveRequest]:
        return list(self._requests.list_leave_requests(user_id=int(user_id), limit=REQUEST_LIST_LIMIT))

    def list_requests(self, *, status: Optional[RequestStatus] = None) -> list[LeaveRequest]:
        return list(self._requests.list_leave_requests(status=status, limit=REQUEST_LIST_LIMIT))
