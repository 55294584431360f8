from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus
from ...geofence.position_source import PositionSource
from ...users.model import User


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError


class LocationPolicy(ABC):
    """Strategy Pattern: authorize a work mode and describe where the user is."""

    @abstractmethod
    def checkin_location(self, *, user: User, positions: PositionSource) -> str:
        """Return the location string to record, or raise an AttendanceError."""

        raise NotImplementedError

    @abstractmethod
    def checkout_location(self, *, positions: PositionSource) -> str:
        """Never fails: check-out is lenient about position."""

        raise NotImplementedError
