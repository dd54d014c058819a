import math

import pytest

from src.hr_timesheet.hr_timesheet.core.exceptions import LocationUnavailable, ValidationError
from src.hr_timesheet.hr_timesheet.geofence.calculator import (
    check_position,
    haversine_distance_meters,
    is_within_geofence,
)
from src.hr_timesheet.hr_timesheet.geofence.model import GeoPoint, OfficeLocationSetting

OFFICE = OfficeLocationSetting(team_id=1, latitude=10.7769, longitude=106.7009, radius_meters=100)


def test_same_point_is_zero_distance():
    assert haversine_distance_meters(10.7769, 106.7009, 10.7769, 106.7009) == 0.0


def test_one_degree_of_latitude():
    assert haversine_distance_meters(0, 0, 1, 0) == pytest.approx(111_195, rel=1e-3)


def test_distance_is_symmetric():
    a = haversine_distance_meters(10.0, 106.0, 10.5, 106.5)
    b = haversine_distance_meters(10.5, 106.5, 10.0, 106.0)
    assert a == pytest.approx(b)


def test_antipodal_points_do_not_fail():
    assert haversine_distance_meters(0, 0, 0, 180) == pytest.approx(math.pi * 6_371_000.0)


def test_office_centre_is_inside():
    assert is_within_geofence(10.7769, 106.7009, 10.7769, 106.7009, 100)


def test_distance_grows_as_position_moves_away():
    near = haversine_distance_meters(10.7770, 106.7009, 10.7769, 106.7009)
    far = haversine_distance_meters(10.7800, 106.7009, 10.7769, 106.7009)
    assert near < far


def test_far_position_is_outside():
    assert not is_within_geofence(10.8000, 106.7009, 10.7769, 106.7009, 100)


def test_radius_boundary_is_inclusive():
    distance = haversine_distance_meters(10.7775, 106.7009, 10.7769, 106.7009)
    assert is_within_geofence(10.7775, 106.7009, 10.7769, 106.7009, distance)


def test_numeric_strings_are_accepted():
    assert is_within_geofence("10.7769", "106.7009", "10.7769", "106.7009", "50")


@pytest.mark.parametrize(
    "lat, lng",
    [(91, 0), (-91, 0), (0, 181), (float("nan"), 0), ("abc", 0), (None, 0), (True, 0)],
)
def test_invalid_coordinates_raise(lat, lng):
    with pytest.raises(ValidationError):
        haversine_distance_meters(lat, lng, 0, 0)


def test_negative_radius_raises():
    with pytest.raises(ValidationError):
        is_within_geofence(0, 0, 0, 0, -1)


def test_check_position_without_position_is_location_unavailable():
    with pytest.raises(LocationUnavailable):
        check_position(None, OFFICE)


def test_check_position_reports_distance_and_radius():
    check = check_position(GeoPoint(latitude=10.7800, longitude=106.7009), OFFICE)
    assert check.radius_meters == 100
    assert check.distance_meters > 300
    assert not check.within


@pytest.mark.parametrize("lat, lng", [(None, None), (None, 106.7009), (10.7769, None), ("", "")])
def test_missing_current_position_is_location_unavailable(lat, lng):
    with pytest.raises(LocationUnavailable):
        is_within_geofence(lat, lng, 10.7769, 106.7009, 100)
