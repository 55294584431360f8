"""First-run seeding of the local store."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from werkzeug.security import generate_password_hash

from ..core.enums import Role, WorkMode
from ..users.model import LocationConfig, User
from .connection import DatabaseConnection
from .sql_base import db_session, get_meta, set_meta
from .tables import UserRow

logger = logging.getLogger(__name__)

PUNE_OFFICE = LocationConfig(type=WorkMode.OFFICE, latitude=18.5204, longitude=73.8567, radius_meters=500)

BOOTSTRAP_USER_IDS = ("ADMIN_001", "EMP_001")


def bootstrap_users(*, admin_password: str, employee_password: str) -> list[User]:
    return [
        User(
            id="ADMIN_001",
            employee_id="MH-ADM-01",
            name="Amol Admin",
            email="admin@mycoharvest.in",
            role=Role.ADMIN,
            department="Management",
            position="System Administrator",
            gender="Male",
            joined_date="2023-01-01",
            allowed_locations=(PUNE_OFFICE,),
            password_hash=generate_password_hash(admin_password),
        ),
        User(
            id="EMP_001",
            employee_id="MH-EMP-01",
            name="Nikita Dabhade",
            email="nikita.dabhade@mycoharvest.in",
            role=Role.USER,
            department="Operations",
            position="Operations Executive",
            gender="Female",
            joined_date="2023-03-15",
            allowed_locations=(
                PUNE_OFFICE,
                LocationConfig(type=WorkMode.HOME, latitude=0, longitude=0, radius_meters=0),
            ),
            password_hash=generate_password_hash(employee_password),
        ),
    ]


def ensure_bootstrap_data(conn: DatabaseConnection, *, admin_password: str, employee_password: str) -> bool:
    """Seed the factory users with revision 0 on an empty database.

    Returns True when anything was written. A database that already carries a
    users revision is left alone, even when a sync emptied the table.
    """
    with db_session(conn) as session:
        has_users = session.execute(select(func.count()).select_from(UserRow)).scalar()
        if has_users or get_meta(session, "users_revision") is not None:
            return False

        users = bootstrap_users(admin_password=admin_password, employee_password=employee_password)
        for seq, user in enumerate(users, start=1):
            session.add(
                UserRow(id=user.id, seq=seq, employee_id=user.employee_id, role=user.role.value, payload=user.to_dict())
            )
        set_meta(session, "users_revision", 0)
        logger.info("seeded %d bootstrap users in %s", len(users), conn.engine.url)
        return True
