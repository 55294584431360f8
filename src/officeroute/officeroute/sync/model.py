from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..attendance.model import AttendanceRecord
from ..users.model import User


@dataclass(frozen=True)
class SyncResult:
    success: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message}


@dataclass(frozen=True)
class Snapshot:
    """Users and attendance as seen on one side of a reconciliation."""

    users: tuple[User, ...] = field(default_factory=tuple)
    attendance: tuple[AttendanceRecord, ...] = field(default_factory=tuple)
