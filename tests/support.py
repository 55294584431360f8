from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

import requests

from src.officeroute.officeroute.attendance.model import AttendanceRecord
from src.officeroute.officeroute.core.enums import AttendanceStatus, Role, WorkMode
from src.officeroute.officeroute.users.model import LocationConfig, User

OFFICE_LAT = 18.5204
OFFICE_LNG = 73.8567


class InMemoryUsers:
    def __init__(self, users: list[User] | None = None, *, revision: int = 1):
        self._users: dict[str, User] = {u.id: u for u in users or []}
        self._revision = revision
        self._lock = threading.RLock()

    def locked(self):
        return self._lock

    def list_all(self):
        return list(self._users.values())

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def add_user(self, user: User) -> None:
        self._users[user.id] = user
        self._revision += 1

    def update_user(self, user: User) -> None:
        self._users[user.id] = user
        self._revision += 1

    def replace_all(self, users, *, mark_modified: bool = True) -> None:
        self._users = {u.id: u for u in users}
        if mark_modified:
            self._revision += 1

    def revision(self) -> int:
        return self._revision


class InMemoryAttendance:
    def __init__(self, records: list[AttendanceRecord] | None = None):
        self._by_id: dict[str, AttendanceRecord] = {r.id: r for r in records or []}
        self._lock = threading.RLock()

    def locked(self):
        return self._lock

    def list_all(self):
        return list(self._by_id.values())

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        return self._by_id.get(record_id)

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return next((r for r in self._by_id.values() if r.user_id == user_id and r.date == work_date), None)

    def get_recent_for_user(self, user_id: str, limit: int):
        items = [r for r in self._by_id.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.check_in_time, reverse=True)
        return items[:limit]

    def get_recent(self, limit: int):
        items = sorted(self._by_id.values(), key=lambda r: r.check_in_time, reverse=True)
        return items[:limit]

    def list_between(self, user_id: str, start: date, end: date):
        return [r for r in self._by_id.values() if r.user_id == user_id and start <= r.date <= end]

    def save(self, record: AttendanceRecord) -> None:
        with self._lock:
            self._by_id[record.id] = record

    def replace_all(self, records) -> None:
        with self._lock:
            self._by_id = {r.id: r for r in records}


@dataclass
class InMemorySyncSettings:
    url: str = ""

    def get_cloud_url(self) -> str:
        return self.url

    def set_cloud_url(self, url: str) -> None:
        self.url = url


class RecordingTrigger:
    def __init__(self):
        self.calls = 0

    def trigger(self):
        self.calls += 1
        return None


class RecordingPositions:
    """Position source that counts how often it was asked."""

    def __init__(self, position=None, error: Exception | None = None):
        self.position = position
        self.error = error
        self.calls = 0

    def get_current_position(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.position


@dataclass
class FakeResponse:
    status_code: int = 200
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")


@dataclass
class FakeRemote:
    """Stands in for the script endpoint: stores POST bodies, echoes on GET."""

    data: dict[str, Any] = field(default_factory=lambda: {"users": [], "attendance": []})
    get_error: Exception | None = None
    post_error: Exception | None = None
    post_status: int = 200
    posts: list[dict[str, Any]] = field(default_factory=list)

    def get(self, url, timeout=None, allow_redirects=True):
        if self.get_error is not None:
            raise self.get_error
        return FakeResponse(200, {"status": "success", "data": json.loads(json.dumps(self.data))})

    def post(self, url, data=None, headers=None, timeout=None, allow_redirects=True):
        if self.post_error is not None:
            raise self.post_error
        body = json.loads(data)
        self.posts.append(body)
        if self.post_status < 400:
            self.data = {"users": body["users"], "attendance": body["attendance"]}
        return FakeResponse(self.post_status, {"status": "success"})


def make_user(
    user_id: str = "EMP_001",
    *,
    role: Role = Role.USER,
    office_radius: float | None = 500,
    home: bool = False,
) -> User:
    locations = []
    if office_radius is not None:
        locations.append(LocationConfig(WorkMode.OFFICE, OFFICE_LAT, OFFICE_LNG, office_radius))
    if home:
        locations.append(LocationConfig(WorkMode.HOME, 0, 0, 0))
    return User(
        id=user_id,
        employee_id=f"MH-{user_id}",
        name=f"Name {user_id}",
        role=role,
        department="Operations",
        allowed_locations=tuple(locations),
    )


def make_record(record_id: str, *, user_id: str = "EMP_001", day: date = date(2026, 3, 1), **changes) -> AttendanceRecord:
    values = dict(
        id=record_id,
        user_id=user_id,
        employee_id=f"MH-{user_id}",
        employee_name=f"Name {user_id}",
        department="Operations",
        date=day,
        check_in_time=datetime.combine(day, datetime.min.time()).replace(hour=9),
        work_mode=WorkMode.OFFICE,
        status=AttendanceStatus.PRESENT,
        check_in_location="18.52040, 73.85670",
    )
    values.update(changes)
    return AttendanceRecord(**values)


