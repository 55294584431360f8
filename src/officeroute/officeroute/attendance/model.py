from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import format_iso_datetime, parse_iso_date, parse_iso_datetime
from ..core.enums import AttendanceStatus, WorkMode


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out pair for a user and day.

    The employee fields are a snapshot taken at check-in time.
    """

    id: str
    user_id: str
    employee_id: str
    employee_name: str
    department: str
    date: date
    check_in_time: datetime
    work_mode: WorkMode
    status: AttendanceStatus
    check_out_time: Optional[datetime] = None
    check_in_location: Optional[str] = None
    check_out_location: Optional[str] = None
    total_duration_minutes: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    def to_dict(self) -> dict[str, Any]:
        data = {
            "id": self.id,
            "userId": self.user_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "department": self.department,
            "date": self.date.isoformat(),
            "checkInTime": format_iso_datetime(self.check_in_time),
            "checkInLocation": self.check_in_location,
            "workMode": self.work_mode.value,
            "status": self.status.value,
        }
        if self.check_out_time is not None:
            data["checkOutTime"] = format_iso_datetime(self.check_out_time)
            data["checkOutLocation"] = self.check_out_location
            data["totalDurationMinutes"] = self.total_duration_minutes
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttendanceRecord":
        duration = data.get("totalDurationMinutes")
        return cls(
            id=str(data["id"]),
            user_id=str(data["userId"]),
            employee_id=str(data.get("employeeId", "")),
            employee_name=str(data.get("employeeName", "")),
            department=str(data.get("department", "")),
            date=parse_iso_date(str(data["date"])),
            check_in_time=parse_iso_datetime(data["checkInTime"]),
            work_mode=WorkMode(data.get("workMode", WorkMode.OFFICE.value)),
            status=AttendanceStatus(data.get("status", AttendanceStatus.PRESENT.value)),
            check_out_time=parse_iso_datetime(data.get("checkOutTime")),
            check_in_location=data.get("checkInLocation"),
            check_out_location=data.get("checkOutLocation"),
            total_duration_minutes=int(duration) if duration is not None else None,
        )


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model for the admin dashboard and the insight prompt."""

    total_employees: int
    present: int
    late: int
    absent: int
    on_remote: int


@dataclass(frozen=True)
class MonthlyStats:
    """An employee's own figures for the current calendar month."""

    month: str
    days_present: int
    total_hours: float
    lates: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "daysPresent": self.days_present,
            "totalHours": self.total_hours,
            "lates": self.lates,
        }
