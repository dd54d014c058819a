from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """Device position as reported by the browser/OS geolocation API."""

    latitude: float
    longitude: float

    def as_location(self) -> str:
        return f"{self.latitude:.6f},{self.longitude:.6f}"


@dataclass(frozen=True)
class OfficeLocationSetting:
    """Geofence of a team: office centre and allowed check-in radius."""

    team_id: int
    latitude: float
    longitude: float
    radius_meters: float


@dataclass(frozen=True)
class GeofenceCheck:
    distance_meters: float
    radius_meters: float

    @property
    def within(self) -> bool:
        return self.distance_meters <= self.radius_meters
