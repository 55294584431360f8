"""Great-circle distance and geofence checks.

Everything here is pure: no I/O, deterministic for given inputs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.constants import EARTH_RADIUS_METERS
from ..core.exceptions import ValidationError

if TYPE_CHECKING:
    from ..users.model import LocationConfig


@dataclass(frozen=True)
class Coordinates:
    """WGS84 position in degrees."""

    latitude: float
    longitude: float


def distance_meters(a: Coordinates, b: Coordinates) -> float:
    """Haversine distance over a spherical Earth (radius 6,371 km)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def within_radius(position: Coordinates, location: "LocationConfig") -> bool:
    return distance_meters(position, location.coordinates) <= location.radius_meters


def format_coordinates(position: Coordinates) -> str:
    return f"{position.latitude:.5f}, {position.longitude:.5f}"


def validate_coordinates(latitude: float, longitude: float) -> Coordinates:
    if not (-90 <= latitude <= 90):
        raise ValidationError("Latitude must be between -90 and 90")
    if not (-180 <= longitude <= 180):
        raise ValidationError("Longitude must be between -180 and 180")
    return Coordinates(latitude=latitude, longitude=longitude)
