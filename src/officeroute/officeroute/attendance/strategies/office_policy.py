from __future__ import annotations

import logging

from ...core.constants import LOCATION_UNAVAILABLE
from ...core.enums import WorkMode
from ...core.exceptions import LocationUnavailable, OutOfRange
from ...geofence.geo import distance_meters, format_coordinates, within_radius
from ...geofence.position_source import PositionSource
from ...users.model import User
from .base import LocationPolicy

logger = logging.getLogger(__name__)


class OfficePolicy(LocationPolicy):
    """Office work: a position is mandatory and must sit inside the geofence."""

    def checkin_location(self, *, user: User, positions: PositionSource) -> str:
        position = positions.get_current_position()

        office = user.location_for(WorkMode.OFFICE)
        if office is not None and not within_radius(position, office):
            distance = distance_meters(position, office.coordinates)
            logger.info(
                "check-in rejected for %s: %.0fm from office (radius %sm)",
                user.id,
                distance,
                office.radius_meters,
            )
            raise OutOfRange(distance, office.radius_meters)

        return format_coordinates(position)

    def checkout_location(self, *, positions: PositionSource) -> str:
        try:
            return format_coordinates(positions.get_current_position())
        except LocationUnavailable as exc:
            logger.info("check-out without position: %s", exc)
            return LOCATION_UNAVAILABLE
