from __future__ import annotations

import threading
from datetime import datetime

import requests

from src.officeroute.officeroute.attendance.service import AttendanceService
from src.officeroute.officeroute.attendance.sql_attendance_repository import SqlAttendanceRepository
from src.officeroute.officeroute.core.enums import WorkMode
from src.officeroute.officeroute.database.bootstrap import ensure_bootstrap_data
from src.officeroute.officeroute.database.connection import open_database
from src.officeroute.officeroute.geofence.position_source import ReportedPosition
from src.officeroute.officeroute.sync.reconciler import SyncReconciler
from src.officeroute.officeroute.users.sql_user_repository import SqlUserRepository
from tests.support import FakeRemote, InMemoryAttendance, InMemorySyncSettings, InMemoryUsers, make_user

URL = "https://script.google.com/macros/s/deployment/exec"


class CheckInWhileMerging(SqlAttendanceRepository):
    """Starts a check-in on another thread as soon as the records are first read."""

    def __init__(self, conn, check_in):
        super().__init__(conn)
        self._check_in = check_in
        self.worker = None

    def list_all(self):
        records = super().list_all()
        if self.worker is None:
            self.worker = threading.Thread(target=self._check_in)
            self.worker.start()
            # Give the check-in every chance to land before the merge commits.
            self.worker.join(timeout=0.5)
        return records


def test_check_in_during_sync_is_not_lost(tmp_path):
    db = open_database(f"sqlite:///{tmp_path / 'race.db'}", shared=False)
    ensure_bootstrap_data(db, admin_password="a", employee_password="b")
    users = SqlUserRepository(db)
    checked_in = []

    def check_in():
        record = service.check_in("EMP_001", WorkMode.HOME, ReportedPosition(), now=datetime(2026, 3, 2, 9, 0))
        checked_in.append(record)

    attendance = CheckInWhileMerging(db, check_in)
    service = AttendanceService(attendance, users)
    reconciler = SyncReconciler(users, attendance, InMemorySyncSettings(URL), session=FakeRemote())

    result = reconciler.sync()
    attendance.worker.join(timeout=5)

    assert result.success
    assert len(checked_in) == 1
    assert [r.id for r in attendance.list_all()] == [checked_in[0].id]


def test_one_http_session_serves_every_sync(monkeypatch):
    created = []

    def new_session():
        remote = FakeRemote()
        created.append(remote)
        return remote

    monkeypatch.setattr(requests, "Session", new_session)
    reconciler = SyncReconciler(InMemoryUsers([make_user()]), InMemoryAttendance(), InMemorySyncSettings(URL))

    assert reconciler.sync().success
    assert reconciler.sync().success
    assert len(created) == 1
    assert len(created[0].posts) == 2
