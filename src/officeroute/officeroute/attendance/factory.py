from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import DEFAULT_LATE_AFTER_HOUR
from ..core.enums import WorkMode
from .strategies.base import AttendanceStrategy, LocationPolicy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.office_policy import OfficePolicy
from .strategies.remote_policy import RemotePolicy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_after_hour: int = DEFAULT_LATE_AFTER_HOUR

    def for_checkin(self, *, now: datetime) -> AttendanceStrategy:
        # Whole-hour rule: 09:59:59 is on time, 10:00:00 is late.
        if now.hour > self.late_after_hour:
            return LateStrategy()
        return NormalStrategy()

    def for_work_mode(self, work_mode: WorkMode) -> LocationPolicy:
        if work_mode == WorkMode.HOME:
            return RemotePolicy()
        return OfficePolicy()
