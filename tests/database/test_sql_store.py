from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from src.officeroute.officeroute.attendance.sql_attendance_repository import SqlAttendanceRepository
from src.officeroute.officeroute.core.enums import WorkMode
from src.officeroute.officeroute.database.bootstrap import BOOTSTRAP_USER_IDS, ensure_bootstrap_data
from src.officeroute.officeroute.database.connection import open_database
from src.officeroute.officeroute.database.sql_base import db_session
from src.officeroute.officeroute.database.tables import AttendanceRow
from src.officeroute.officeroute.sync.sql_settings_repository import SqlSyncSettingsRepository
from src.officeroute.officeroute.users.model import User
from src.officeroute.officeroute.users.sql_user_repository import SqlUserRepository
from tests.support import make_record, make_user


@pytest.fixture
def db(tmp_path):
    db = open_database(f"sqlite:///{tmp_path / 'officeroute.db'}", shared=False)
    ensure_bootstrap_data(db, admin_password="a", employee_password="b")
    return db


def test_bootstrap_seeds_factory_users_once(db):
    users = SqlUserRepository(db)

    assert tuple(u.id for u in users.list_all()) == BOOTSTRAP_USER_IDS
    assert users.revision() == 0
    assert ensure_bootstrap_data(db, admin_password="a", employee_password="b") is False


def test_bootstrap_does_not_refill_a_synced_empty_table(db):
    users = SqlUserRepository(db)
    users.replace_all([])

    assert ensure_bootstrap_data(db, admin_password="a", employee_password="b") is False
    assert users.list_all() == []


def test_bootstrap_employee_may_work_from_home(db):
    employee = SqlUserRepository(db).get_by_id("EMP_001")
    assert employee.location_for(WorkMode.HOME) is not None
    assert employee.password_hash and employee.password_hash != "b"


def test_user_upsert_bumps_revision(db):
    users = SqlUserRepository(db)
    users.add_user(make_user("EMP_002"))
    users.update_user(replace(make_user("EMP_002"), name="Changed"))

    assert users.get_by_id("EMP_002").name == "Changed"
    assert [u.id for u in users.list_all()] == ["ADMIN_001", "EMP_001", "EMP_002"]
    assert users.revision() == 2


def test_replace_all_can_leave_revision_alone(db):
    users = SqlUserRepository(db)
    users.replace_all(users.list_all(), mark_modified=False)
    assert users.revision() == 0
    users.replace_all([make_user("X")])
    assert [u.id for u in users.list_all()] == ["X"]
    assert users.revision() == 1


def test_unknown_user_fields_survive_a_round_trip(db):
    users = SqlUserRepository(db)
    row = make_user("EMP_003").to_dict()
    row["password"] = "kept-for-other-clients"

    users.add_user(User.from_dict(row))

    assert users.get_by_id("EMP_003").to_dict()["password"] == "kept-for-other-clients"


def test_attendance_save_is_keyed_upsert(db):
    attendance = SqlAttendanceRepository(db)
    record = make_record("r1", day=date(2026, 3, 2))
    attendance.save(make_record("r0", day=date(2026, 3, 1)))
    attendance.save(record)
    closed = replace(record, check_out_time=record.check_in_time + timedelta(hours=8), total_duration_minutes=480)
    attendance.save(closed)

    assert [r.id for r in attendance.list_all()] == ["r0", "r1"]
    assert attendance.get_for_user_and_date("EMP_001", date(2026, 3, 2)) == closed
    assert attendance.get_for_user_and_date("EMP_001", date(2026, 3, 3)) is None


def test_recent_for_user_is_newest_first(db):
    attendance = SqlAttendanceRepository(db)
    for day in (1, 3, 2):
        attendance.save(make_record(f"r{day}", day=date(2026, 3, day)))
    attendance.save(make_record("other", user_id="EMP_002", day=date(2026, 3, 4)))

    assert [r.id for r in attendance.get_recent_for_user("EMP_001", 2)] == ["r3", "r2"]
    assert [r.id for r in attendance.get_recent(2)] == ["other", "r3"]


def test_list_between_is_inclusive(db):
    attendance = SqlAttendanceRepository(db)
    for day in (1, 15, 31):
        attendance.save(make_record(f"m{day}", day=date(2026, 3, day)))
    attendance.save(make_record("april", day=date(2026, 4, 1)))

    found = attendance.list_between("EMP_001", date(2026, 3, 1), date(2026, 3, 31))
    assert [r.id for r in found] == ["m1", "m15", "m31"]


def test_records_written_by_browser_clients_load(db):
    row = make_record("js").to_dict()
    row["checkInTime"] = "2026-03-01T03:30:00.000Z"
    with db_session(db) as session:
        session.add(
            AttendanceRow(
                id="js",
                seq=1,
                user_id="EMP_001",
                work_date=date(2026, 3, 1),
                check_in_ts=datetime(2026, 3, 1, 3, 30, tzinfo=timezone.utc).timestamp(),
                payload=row,
            )
        )

    loaded = SqlAttendanceRepository(db).get_by_id("js")
    assert loaded.check_in_time == datetime(2026, 3, 1, 3, 30, tzinfo=timezone.utc)


def test_cloud_url_setting(db):
    settings = SqlSyncSettingsRepository(db, default_url="https://script.google.com/default")
    assert settings.get_cloud_url() == "https://script.google.com/default"
    settings.set_cloud_url("  https://script.google.com/mine  ")
    assert settings.get_cloud_url() == "https://script.google.com/mine"


def test_shared_connection_per_url(tmp_path):
    url_a = f"sqlite:///{tmp_path / 'a.db'}"
    url_b = f"sqlite:///{tmp_path / 'b.db'}"
    assert open_database(url_a) is open_database(url_a)
    assert open_database(url_a) is not open_database(url_b)


def test_failed_unit_of_work_rolls_back(db):
    attendance = SqlAttendanceRepository(db)
    with pytest.raises(RuntimeError):
        with db_session(db) as session:
            session.add(
                AttendanceRow(id="x", seq=1, user_id="EMP_001", work_date=date(2026, 3, 1), check_in_ts=0.0, payload={})
            )
            session.flush()
            raise RuntimeError("boom")

    assert attendance.list_all() == []
