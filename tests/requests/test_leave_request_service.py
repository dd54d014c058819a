from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.hr_timesheet.hr_timesheet.core.enums import LeaveDayPart, LeaveType, RequestStatus, Role
from src.hr_timesheet.hr_timesheet.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_timesheet.hr_timesheet.requests.model import LeaveRequest
from src.hr_timesheet.hr_timesheet.requests.service import LeaveRequestService
from src.hr_timesheet.hr_timesheet.users.model import User


@dataclass
class InMemoryUsers:
    users: dict[int, User]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)


@dataclass
class InMemoryLeaves:
    rows: dict[int, LeaveRequest] = field(default_factory=dict)

    def create_leave(self, *, user_id, leave_type, day_part, start_date, end_date, reason):
        request_id = len(self.rows) + 1
        self.rows[request_id] = LeaveRequest(
            request_id=request_id, user_id=user_id, leave_type=leave_type, day_part=day_part,
            start_date=start_date, end_date=end_date, reason=reason,
            status=RequestStatus.PENDING, created_at=datetime(2024, 5, 1, 8, request_id),
        )
        return request_id

    def get_leave(self, *, request_id):
        return self.rows.get(request_id)

    def list_leave_requests(self, *, status=None, user_id=None, limit=200):
        rows = [
            r for r in self.rows.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == user_id)
        ]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)[:limit]

    def decide_leave(self, *, request_id, status, decided_by, admin_note=None):
        req = self.rows.get(request_id)
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.rows[request_id] = replace(
            req, status=status, decided_by=decided_by, decided_at=datetime(2024, 5, 2), admin_note=admin_note
        )
        return True


def _user(user_id: int, role: Role = Role.STAFF, active: bool = True) -> User:
    return User(
        user_id=user_id, full_name=f"User {user_id}", email=f"u{user_id}@example.com",
        password_hash="x", role=role, team_id=1, shift_id=1, is_active=active,
    )


def _service():
    leaves = InMemoryLeaves()
    users = InMemoryUsers({1: _user(1, Role.ADMIN), 2: _user(2), 3: _user(3, active=False)})
    return LeaveRequestService(leaves, users), leaves


def _file(svc, **overrides):
    kwargs = dict(
        user_id=2, leave_type="annual", start_date=date(2024, 6, 3), end_date=date(2024, 6, 5), reason="Family trip"
    )
    kwargs.update(overrides)
    return svc.create_leave(**kwargs)


def test_create_leave_is_pending_and_counts_days():
    svc, leaves = _service()

    request_id = _file(svc)

    req = leaves.rows[request_id]
    assert req.status == RequestStatus.PENDING
    assert req.leave_type == LeaveType.ANNUAL
    assert req.day_part == LeaveDayPart.FULL
    assert req.days == 3.0


def test_half_day_counts_half_and_must_be_single_day():
    svc, leaves = _service()

    request_id = _file(svc, day_part="HALF_AM", end_date=date(2024, 6, 3))

    assert leaves.rows[request_id].days == 0.5
    with pytest.raises(ValidationError):
        _file(svc, day_part="HALF_PM")


@pytest.mark.parametrize(
    "overrides",
    [
        {"end_date": date(2024, 6, 1)},
        {"leave_type": "holiday"},
        {"leave_type": None},
        {"day_part": "EVENING"},
        {"reason": "   "},
        {"user_id": 3},
        {"user_id": 42},
    ],
)
def test_invalid_leave_is_rejected(overrides):
    svc, leaves = _service()

    with pytest.raises(ValidationError):
        _file(svc, **overrides)
    assert leaves.rows == {}


def test_admin_approves_once():
    svc, leaves = _service()
    request_id = _file(svc)

    svc.approve_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=request_id, admin_note=" ok ")

    req = leaves.rows[request_id]
    assert req.status == RequestStatus.APPROVED
    assert req.decided_by == 1
    assert req.admin_note == "ok"
    with pytest.raises(ValidationError, match="already approved"):
        svc.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=request_id)


def test_staff_cannot_decide():
    svc, leaves = _service()
    request_id = _file(svc)

    with pytest.raises(AuthorizationError):
        svc.approve_leave(current_role=Role.STAFF, admin_user_id=2, request_id=request_id)
    assert leaves.rows[request_id].status == RequestStatus.PENDING


def test_deciding_unknown_request_is_not_found():
    svc, _ = _service()

    with pytest.raises(NotFoundError):
        svc.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=99)
    with pytest.raises(NotFoundError):
        svc.get_leave(99)


def test_lists_filter_by_owner_and_status():
    svc, _ = _service()
    first = _file(svc)
    second = _file(svc, leave_type="sick", start_date=date(2024, 6, 10), end_date=date(2024, 6, 10))
    svc.reject_leave(current_role=Role.ADMIN, admin_user_id=1, request_id=first, admin_note="busy week")

    assert [r.request_id for r in svc.list_my_requests(user_id=2)] == [second, first]
    assert [r.request_id for r in svc.list_requests(status=RequestStatus.PENDING)] == [second]
    assert len(svc.list_requests()) == 2
