from __future__ import annotations

from ...core.constants import REMOTE_LOCATION
from ...core.enums import WorkMode
from ...core.exceptions import PolicyDenied
from ...geofence.position_source import PositionSource
from ...users.model import User
from .base import LocationPolicy


class RemotePolicy(LocationPolicy):
    """Work from home: allowed by a HOME entry, no position is ever requested."""

    def checkin_location(self, *, user: User, positions: PositionSource) -> str:
        if user.location_for(WorkMode.HOME) is None:
            raise PolicyDenied("You are not authorized for remote work. Please contact your admin.")
        return REMOTE_LOCATION

    def checkout_location(self, *, positions: PositionSource) -> str:
        return REMOTE_LOCATION
