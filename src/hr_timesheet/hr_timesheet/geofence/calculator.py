"""Great-circle distance and geofence membership.

Coordinates may arrive as numbers or as numeric strings (office settings
are string typed in the admin form); both are accepted and validated.
"""
from __future__ import annotations

import math
from typing import Optional, Union

from ..common.validators import require_in_range, require_non_negative
from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import LocationUnavailable
from .model import GeoPoint, GeofenceCheck, OfficeLocationSetting

Number = Union[float, int, str]


def _latitude(value: Number, field_name: str) -> float:
    return require_in_range(value, field_name, -90.0, 90.0)


def _longitude(value: Number, field_name: str) -> float:
    return require_in_range(value, field_name, -180.0, 180.0)


def haversine_distance_meters(lat1: Number, lng1: Number, lat2: Number, lng2: Number) -> float:
    phi1 = math.radians(_latitude(lat1, "latitude"))
    phi2 = math.radians(_latitude(lat2, "latitude"))
    d_phi = phi2 - phi1
    d_lambda = math.radians(_longitude(lng2, "longitude") - _longitude(lng1, "longitude"))

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push `a` marginally above 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))


def is_within_geofence(
    current_lat: Number,
    current_lng: Number,
    office_lat: Number,
    office_lng: Number,
    radius_meters: Number,
) -> bool:
    """True iff the current position is at most `radius_meters` from the office.

    A missing current position raises LocationUnavailable, never False.
    """
    if current_lat in (None, "") or current_lng in (None, ""):
        raise LocationUnavailable("Current location is unavailable; allow location access to check in")
    radius = require_non_negative(radius_meters, "radius_meters")
    return haversine_distance_meters(current_lat, current_lng, office_lat, office_lng) <= radius


def check_position(position: Optional[GeoPoint], office: OfficeLocationSetting) -> GeofenceCheck:
    """Measure a device position against a team's office location.

    A missing position is LocationUnavailable, never "outside".
    """
    if position is None:
        raise LocationUnavailable("Current location is unavailable; allow location access to check in")

    radius = require_non_negative(office.radius_meters, "radius_meters")
    distance = haversine_distance_meters(position.latitude, position.longitude, office.latitude, office.longitude)
    return GeofenceCheck(distance_meters=distance, radius_meters=radius)
