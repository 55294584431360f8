from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.enums import Role, WorkMode
from ..geofence.geo import Coordinates


@dataclass(frozen=True)
class LocationConfig:
    """Authorized work location.

    ``radius_meters`` only matters for OFFICE entries; a HOME entry carries no
    geofence, its presence alone authorizes remote work.
    """

    type: WorkMode
    latitude: float
    longitude: float
    radius_meters: float = 0

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "radiusMeters": self.radius_meters,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocationConfig":
        return cls(
            type=WorkMode(data["type"]),
            latitude=float(data.get("latitude", 0)),
            longitude=float(data.get("longitude", 0)),
            radius_meters=float(data.get("radiusMeters", 0) or 0),
        )


@dataclass(frozen=True)
class User:
    """Domain entity: employee or administrator."""

    id: str
    employee_id: str
    name: str
    role: Role
    email: str = ""
    department: str = ""
    position: str = ""
    gender: str = ""
    joined_date: str = ""
    allowed_locations: tuple[LocationConfig, ...] = field(default_factory=tuple)
    password_hash: Optional[str] = None
    # Fields written by other clients that this model does not know about.
    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_attendance_eligible(self) -> bool:
        return self.role != Role.ADMIN

    def location_for(self, location_type: WorkMode) -> Optional[LocationConfig]:
        for loc in self.allowed_locations:
            if loc.type == location_type:
                return loc
        return None

    def to_dict(self) -> dict[str, Any]:
        data = {
            **self.extra,
            "id": self.id,
            "employeeId": self.employee_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
            "position": self.position,
            "gender": self.gender,
            "joinedDate": self.joined_date,
            "allowedLocations": [loc.to_dict() for loc in self.allowed_locations],
        }
        if self.password_hash:
            data["passwordHash"] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            employee_id=str(data.get("employeeId", "")),
            name=str(data.get("name", "")),
            role=Role(data.get("role", Role.USER.value)),
            email=str(data.get("email", "")),
            department=str(data.get("department", "")),
            position=str(data.get("position", "")),
            gender=str(data.get("gender", "")),
            joined_date=str(data.get("joinedDate", "")),
            allowed_locations=tuple(LocationConfig.from_dict(loc) for loc in data.get("allowedLocations") or []),
            password_hash=data.get("passwordHash"),
            extra={k: v for k, v in data.items() if k not in _USER_KEYS},
        )


_USER_KEYS = frozenset(
    {
        "id",
        "employeeId",
        "name",
        "email",
        "role",
        "department",
        "position",
        "gender",
        "joinedDate",
        "allowedLocations",
        "passwordHash",
    }
)
