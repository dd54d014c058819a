from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import parse_time_of_day
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .duration import format_shift_duration, shift_duration_hours
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftView:
    shift_id: int
    shift_name: str
    start_time: str
    end_time: str
    duration_hours: float
    duration_label: str
    overnight: bool


class ShiftService:
    """Use case: shift catalogue managed by admins, read by everyone."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def list_shifts(self) -> list[ShiftView]:
        shifts = sorted(self._shifts.list_all(), key=lambda s: (s.start_time, s.shift_id))
        return [self._to_view(s) for s in shifts]

    def get_shift(self, shift_id: int) -> ShiftView:
        shift = self._shifts.get_by_id(int(shift_id))
        if not shift:
            raise NotFoundError("Shift not found")
        return self._to_view(shift)

    def create_shift(self, *, current_role: Role, name: str, start: str, end: str) -> int:
        self._require_admin(current_role)
        shift_name, start_time, end_time = self._validate(name, start, end)
        shift_id = self._shifts.create(shift_name=shift_name, start_time=start_time, end_time=end_time)
        logger.info("Shift %s created: %s %s-%s", shift_id, shift_name, start_time, end_time)
        return shift_id

    def update_shift(self, *, current_role: Role, shift_id: int, name: str, start: str, end: str) -> None:
        self._require_admin(current_role)
        shift_name, start_time, end_time = self._validate(name, start, end)
        ok = self._shifts.update(shift_id=int(shift_id), shift_name=shift_name, start_time=start_time, end_time=end_time)
        if not ok:
            raise NotFoundError("Shift not found")

    def delete_shift(self, *, current_role: Role, shift_id: int) -> None:
        self._require_admin(current_role)
        if not self._shifts.delete(int(shift_id)):
            raise NotFoundError("Shift not found")
        logger.info("Shift %s deleted", shift_id)

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage shifts")

    @staticmethod
    def _validate(name: Optional[str], start: Optional[str], end: Optional[str]):
        if not start or not end:
            raise ValidationError("Shift name, start time and end time are required")
        return require_non_empty(name, "Shift name"), parse_time_of_day(start), parse_time_of_day(end)

    @staticmethod
    def _to_view(shift: Shift) -> ShiftView:
        return ShiftView(
            shift_id=shift.shift_id,
            shift_name=shift.shift_name,
            start_time=shift.start_time.strftime("%H:%M:%S"),
            end_time=shift.end_time.strftime("%H:%M:%S"),
            duration_hours=shift_duration_hours(shift.start_time, shift.end_time),
            duration_label=format_shift_duration(shift.start_time, shift.end_time),
            overnight=shift.is_overnight,
        )
