class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced row does not exist."""


class LocationUnavailable(DomainError):
    """Raised when the device position cannot be determined.

    Distinct from OutsideGeofence: permission denied or unsupported geolocation
    says nothing about where the employee is.
    """


class OutsideGeofence(ValidationError):
    """Raised when a punch is recorded farther than the office radius."""

    def __init__(self, distance_meters: float, radius_meters: float):
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters
        super().__init__(
            f"Position is {distance_meters:.0f} m from the office (allowed radius {radius_meters:.0f} m)"
        )


class MissingPairedEvent(DomainError):
    """A day has a check-in without a check-out (or the reverse)."""


class InvalidTimeRange(ValidationError):
    """A check-out precedes its check-in."""
