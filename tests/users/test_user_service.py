from dataclasses import replace

import pytest

from src.officeroute.officeroute.core.enums import Role, WorkMode
from src.officeroute.officeroute.core.exceptions import ValidationError
from src.officeroute.officeroute.users.model import LocationConfig
from src.officeroute.officeroute.users.service import UserService
from tests.support import InMemoryUsers, RecordingTrigger, make_user


@pytest.fixture
def trigger():
    return RecordingTrigger()


@pytest.fixture
def repo():
    return InMemoryUsers([make_user("ADMIN_001", role=Role.ADMIN), make_user("EMP_001")], revision=0)


@pytest.fixture
def svc(repo, trigger):
    return UserService(repo, sync_trigger=trigger)


def test_add_user_marks_store_modified_and_syncs(svc, repo, trigger):
    svc.add_user(make_user("EMP_002", home=True))

    assert svc.get_user("EMP_002") is not None
    assert repo.revision() == 1
    assert trigger.calls == 1


def test_add_user_rejects_duplicates(svc, trigger):
    with pytest.raises(ValidationError):
        svc.add_user(make_user("EMP_001"))
    with pytest.raises(ValidationError, match="Employee ID"):
        svc.add_user(replace(make_user("EMP_XYZ"), employee_id="MH-EMP_001"))
    assert trigger.calls == 0


def test_one_location_per_type(svc):
    office = LocationConfig(WorkMode.OFFICE, 1, 2, 100)
    user = replace(make_user("EMP_002"), allowed_locations=(office, replace(office, radius_meters=200)))

    with pytest.raises(ValidationError, match="one location per type"):
        svc.add_user(user)


def test_update_user(svc, trigger):
    svc.update_user(replace(make_user("EMP_001"), department="Sales"))

    assert svc.get_user("EMP_001").department == "Sales"
    assert trigger.calls == 1


def test_update_missing_user(svc):
    with pytest.raises(ValidationError):
        svc.update_user(make_user("GHOST"))


def test_update_cannot_take_another_employee_id(svc, trigger):
    with pytest.raises(ValidationError, match="already taken"):
        svc.update_user(replace(make_user("EMP_001"), employee_id="MH-ADMIN_001"))
    assert trigger.calls == 0


def test_admins_are_not_attendance_eligible(svc):
    assert [u.id for u in svc.attendance_eligible_users()] == ["EMP_001"]
    assert len(svc.list_users()) == 2
