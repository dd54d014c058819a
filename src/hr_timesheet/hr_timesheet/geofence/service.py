from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_in_range, require_non_negative
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.team_repository import TeamRepository
from .calculator import check_position
from .model import GeoPoint, GeofenceCheck, OfficeLocationSetting
from .repository import OfficeLocationRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamLocationView:
    team_id: int
    team_name: str
    setting: Optional[OfficeLocationSetting]


class OfficeLocationService:
    """Use case: per-team office location used to gate check-in/check-out."""

    def __init__(
        self,
        locations: OfficeLocationRepository,
        teams: TeamRepository,
        *,
        default_radius: float = DEFAULT_GEOFENCE_RADIUS_METERS,
    ):
        self._locations = locations
        self._teams = teams
        self._default_radius = float(default_radius)

    def list_team_settings(self) -> list[TeamLocationView]:
        return [
            TeamLocationView(team_id=t.team_id, team_name=t.team_name, setting=self._locations.get_for_team(t.team_id))
            for t in self._teams.list_all()
        ]

    def get_for_team(self, team_id: Optional[int]) -> Optional[OfficeLocationSetting]:
        if not team_id:
            return None
        return self._locations.get_for_team(int(team_id))

    def save_for_team(
        self,
        *,
        current_role: Role,
        team_id: int,
        latitude,
        longitude,
        radius_meters=None,
    ) -> OfficeLocationSetting:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can change office locations")
        if not self._teams.get_by_id(int(team_id)):
            raise NotFoundError("Team not found")

        radius = self._default_radius if radius_meters in (None, "") else radius_meters
        setting = OfficeLocationSetting(
            team_id=int(team_id),
            latitude=require_in_range(latitude, "latitude", -90.0, 90.0),
            longitude=require_in_range(longitude, "longitude", -180.0, 180.0),
            radius_meters=require_non_negative(radius, "radius_meters"),
        )
        self._locations.upsert(setting)
        logger.info(
            "Office location saved for team %s (%.6f, %.6f, r=%.0f m)",
            setting.team_id, setting.latitude, setting.longitude, setting.radius_meters,
        )
        return setting

    def check_position(self, team_id: Optional[int], position: Optional[GeoPoint]) -> Optional[GeofenceCheck]:
        """Distance of `position` to the team office, or None when no geofence is set."""
        office = self.get_for_team(team_id)
        if office is None:
            return None
        return check_position(position, office)
