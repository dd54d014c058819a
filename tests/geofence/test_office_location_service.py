from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from src.hr_timesheet.hr_timesheet.core.enums import Role
from src.hr_timesheet.hr_timesheet.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_timesheet.hr_timesheet.geofence.model import GeoPoint, OfficeLocationSetting
from src.hr_timesheet.hr_timesheet.geofence.service import OfficeLocationService
from src.hr_timesheet.hr_timesheet.users.team_model import Team


@dataclass
class InMemoryTeams:
    teams: dict[int, Team]

    def list_all(self):
        return list(self.teams.values())

    def get_by_id(self, team_id: int) -> Optional[Team]:
        return self.teams.get(team_id)


@dataclass
class InMemoryLocations:
    by_team: dict[int, OfficeLocationSetting] = field(default_factory=dict)

    def get_for_team(self, team_id: int) -> Optional[OfficeLocationSetting]:
        return self.by_team.get(team_id)

    def upsert(self, setting: OfficeLocationSetting) -> None:
        self.by_team[setting.team_id] = setting


def _service(default_radius: float = 150):
    locations = InMemoryLocations()
    teams = InMemoryTeams({1: Team(team_id=1, team_name="Head Office"), 2: Team(team_id=2, team_name="Warehouse")})
    return OfficeLocationService(locations, teams, default_radius=default_radius), locations


def test_admin_saves_location_with_default_radius():
    svc, locations = _service()

    setting = svc.save_for_team(current_role=Role.ADMIN, team_id=1, latitude="10.5", longitude="106.25")

    assert setting == OfficeLocationSetting(team_id=1, latitude=10.5, longitude=106.25, radius_meters=150.0)
    assert locations.by_team[1] == setting


def test_saving_again_overwrites_previous_setting():
    svc, locations = _service()
    svc.save_for_team(current_role=Role.ADMIN, team_id=1, latitude=10, longitude=106, radius_meters=50)
    svc.save_for_team(current_role=Role.ADMIN, team_id=1, latitude=11, longitude=107, radius_meters=80)

    assert locations.by_team[1].latitude == 11
    assert locations.by_team[1].radius_meters == 80


def test_staff_cannot_save_location():
    svc, _ = _service()
    with pytest.raises(AuthorizationError):
        svc.save_for_team(current_role=Role.STAFF, team_id=1, latitude=10, longitude=106)


def test_unknown_team_is_not_found():
    svc, _ = _service()
    with pytest.raises(NotFoundError):
        svc.save_for_team(current_role=Role.ADMIN, team_id=9, latitude=10, longitude=106)


@pytest.mark.parametrize(
    "lat, lng, radius",
    [(95, 106, 100), (10, 200, 100), (10, 106, -5), ("", 106, 100), (10, "east", 100)],
)
def test_invalid_settings_are_rejected(lat, lng, radius):
    svc, locations = _service()
    with pytest.raises(ValidationError):
        svc.save_for_team(current_role=Role.ADMIN, team_id=1, latitude=lat, longitude=lng, radius_meters=radius)
    assert locations.by_team == {}


def test_list_team_settings_includes_unconfigured_teams():
    svc, _ = _service()
    svc.save_for_team(current_role=Role.ADMIN, team_id=2, latitude=10, longitude=106)

    views = {v.team_id: v for v in svc.list_team_settings()}

    assert views[1].setting is None
    assert views[2].setting.radius_meters == 150


def test_check_position_without_setting_returns_none():
    svc, _ = _service()
    assert svc.check_position(1, GeoPoint(latitude=0, longitude=0)) is None
    assert svc.check_position(None, None) is None
