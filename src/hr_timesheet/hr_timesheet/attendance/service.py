from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import EventType, PairingOrder
from ..core.exceptions import OutsideGeofence, ValidationError
from ..geofence.model import GeoPoint
from ..geofence.service import OfficeLocationService
from ..users.repository import UserRepository
from .model import AttendanceEvent, PairingReport
from .pairing import audit_daily_attendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchResult:
    event_id: int
    event_type: EventType
    timestamp: datetime
    distance_meters: Optional[float]


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        locations: OfficeLocationService,
        *,
        pairing_order: PairingOrder = PairingOrder.TIMESTAMP,
    ):
        self._attendance = attendance
        self._users = users
        self._locations = locations
        self._pairing_order = pairing_order

    def check_in(
        self,
        user_id: int,
        *,
        position: Optional[GeoPoint],
        notes: Optional[str] = None,
        now: datetime | None = None,
    ) -> PunchResult:
        return self._punch(user_id, EventType.CHECK_IN, position=position, notes=notes, now=now)

    def check_out(
        self,
        user_id: int,
        *,
        position: Optional[GeoPoint],
        notes: Optional[str] = None,
        now: datetime | None = None,
    ) -> PunchResult:
        return self._punch(user_id, EventType.CHECK_OUT, position=position, notes=notes, now=now)

    def _punch(
        self,
        user_id: int,
        event_type: EventType,
        *,
        position: Optional[GeoPoint],
        notes: Optional[str],
        now: datetime | None,
    ) -> PunchResult:
        now = now or datetime.now()

        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise ValidationError("Employee does not exist")

        # Raises LocationUnavailable when the team has a geofence and no position was sent.
        check = self._locations.check_position(user.team_id, position)
        if check is not None and not check.within:
            logger.info(
                "Rejected %s for user %s: %.0f m from office (radius %.0f m)",
                event_type.value, user_id, check.distance_meters, check.radius_meters,
            )
            raise OutsideGeofence(check.distance_meters, check.radius_meters)

        event_id = self._attendance.create_event(
            user_id=user_id,
            timestamp=now,
            event_type=event_type,
            location=position.as_location() if position else None,
            notes=(notes or "").strip() or None,
        )
        return PunchResult(
            event_id=event_id,
            event_type=event_type,
            timestamp=now,
            distance_meters=check.distance_meters if check else None,
        )

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[AttendanceEvent]:
        return list(self._attendance.get_recent_for_user(user_id, limit))

    def recent_events(self, *, limit: int) -> list[AttendanceEvent]:
        return list(self._attendance.list_recent(limit))

    def daily_hours(self, user_id: int, *, start: date, end: date) -> PairingReport:
        """Worked hours per day for the inclusive date range [start, end]."""
        if end < start:
            raise ValidationError("End date must not precede start date")

        range_start = datetime.combine(start, datetime.min.time())
        range_end = datetime.combine(end + timedelta(days=1), datetime.min.time())
        events = self._attendance.list_for_user_between(user_id, range_start, range_end)
        return audit_daily_attendance(events, user_id, range_start, range_end, order=self._pairing_order)
