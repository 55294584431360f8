class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AttendanceError(DomainError):
    """Base for check-in/check-out failures. All are recoverable by retrying."""

    code = "ATTENDANCE_ERROR"


class PolicyDenied(AttendanceError):
    """The user is not authorized for the requested work mode."""

    code = "POLICY_DENIED"


class LocationUnavailable(AttendanceError):
    """The device position could not be obtained (denied, unsupported, timeout)."""

    code = "LOCATION_UNAVAILABLE"


class OutOfRange(AttendanceError):
    """The reported position lies outside the office geofence."""

    code = "OUT_OF_RANGE"

    def __init__(self, distance_meters: float, radius_meters: float):
        self.distance_meters = distance_meters
        self.radius_meters = radius_meters
        super().__init__(
            f"You are {round(distance_meters)}m away from Office. "
            f"Max allowed: {_fmt_radius(radius_meters)}m."
        )


class InvalidState(AttendanceError):
    """The (user, date) lifecycle does not allow the requested transition."""

    code = "INVALID_STATE"


class Unexpected(AttendanceError):
    """Catch-all for runtime faults that are not one of the kinds above."""

    code = "UNEXPECTED"


class SyncError(Exception):
    """Raised inside the reconciler; turned into a SyncResult before returning."""


class NetworkError(SyncError):
    pass


class EndpointPermissionError(SyncError):
    """The endpoint is unreachable or blocks anonymous access."""


def _fmt_radius(radius: float) -> str:
    return str(int(radius)) if float(radius).is_integer() else str(radius)
