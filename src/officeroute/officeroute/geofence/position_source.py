"""Device position acquisition.

The position is acquired on the employee's device and sent along with the
request. The server tells the device how to acquire it (``PositionOptions``)
and treats every failure (permission denied, unsupported, timeout) as
LocationUnavailable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

from ..core.constants import DEFAULT_POSITION_TIMEOUT_SECONDS, POSITION_TIMEOUT_ERROR
from ..core.exceptions import LocationUnavailable
from .geo import Coordinates


class PositionSource(Protocol):
    def get_current_position(self) -> Coordinates:
        raise NotImplementedError


@dataclass(frozen=True)
class PositionOptions:
    """Acquisition options handed to the device (geolocation API shape)."""

    timeout_seconds: float = DEFAULT_POSITION_TIMEOUT_SECONDS
    high_accuracy: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "enableHighAccuracy": self.high_accuracy,
            "timeout": int(self.timeout_seconds * 1000),
            "maximumAge": 0,
        }


@dataclass(frozen=True)
class ReportedPosition:
    """Position reported by the client device along with the request.

    ``error`` is the device's reason when it has no fix; ``"TIMEOUT"`` means
    the acquisition ran past ``PositionOptions.timeout_seconds``.
    """

    position: Optional[Coordinates] = None
    error: Optional[str] = None

    def get_current_position(self) -> Coordinates:
        if self.position is not None:
            return self.position
        if (self.error or "").strip().upper() == POSITION_TIMEOUT_ERROR:
            raise LocationUnavailable("Location request timed out. Please retry.")
        raise LocationUnavailable(
            f"Could not get your location: {self.error or 'position not provided'}. "
            "Please enable location services and retry."
        )
