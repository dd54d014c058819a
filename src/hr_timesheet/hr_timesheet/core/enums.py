from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"


class EventType(str, Enum):
    """Kind of a raw attendance punch."""

    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class PairingOrder(str, Enum):
    """How the first check-in/check-out of a day is chosen.

    TIMESTAMP picks the earliest punch of each type; INPUT keeps the legacy
    behaviour of taking the first one found in the input sequence.
    """

    TIMESTAMP = "timestamp"
    INPUT = "input"


class PairingIssueKind(str, Enum):
    MISSING_CHECK_IN = "MISSING_CHECK_IN"
    MISSING_CHECK_OUT = "MISSING_CHECK_OUT"
    NEGATIVE_DURATION = "NEGATIVE_DURATION"


class RequestStatus(str, Enum):
    """Lifecycle of leave requests and registrations: pending -> approved | rejected."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    UNPAID = "unpaid"


class LeaveDayPart(str, Enum):
    """Portion of the day a leave covers; half days are single-day requests."""

    FULL = "FULL"
    HALF_AM = "HALF_AM"
    HALF_PM = "HALF_PM"
