from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..database.connection import DatabaseConnection
from ..database.sql_base import db_session, get_meta, next_seq, set_meta
from ..database.tables import UserRow
from .model import User
from .repository import UserRepository

USERS_REVISION = "users_revision"


class SqlUserRepository(UserRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def locked(self) -> AbstractContextManager:
        return self._conn.locked()

    def list_all(self) -> Sequence[User]:
        with db_session(self._conn) as session:
            rows = session.scalars(select(UserRow).order_by(UserRow.seq)).all()
            return [User.from_dict(r.payload) for r in rows]

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_session(self._conn) as session:
            row = session.get(UserRow, user_id)
            return User.from_dict(row.payload) if row else None

    def add_user(self, user: User) -> None:
        self._upsert(user)

    def update_user(self, user: User) -> None:
        self._upsert(user)

    def replace_all(self, users: Sequence[User], *, mark_modified: bool = True) -> None:
        with db_session(self._conn) as session:
            session.execute(delete(UserRow))
            for seq, user in enumerate(users, start=1):
                session.add(_to_row(user, seq))
            if mark_modified:
                _bump_revision(session)

    def revision(self) -> int:
        with db_session(self._conn) as session:
            return _revision(session)

    def _upsert(self, user: User) -> None:
        with db_session(self._conn) as session:
            row = session.get(UserRow, user.id)
            if row is None:
                session.add(_to_row(user, next_seq(session, UserRow)))
            else:
                row.employee_id = user.employee_id
                row.role = user.role.value
                row.payload = user.to_dict()
            _bump_revision(session)


def _to_row(user: User, seq: int) -> UserRow:
    return UserRow(id=user.id, seq=seq, employee_id=user.employee_id, role=user.role.value, payload=user.to_dict())


def _revision(session: Session) -> int:
    # A database without the counter predates bootstrap tracking: treat as modified.
    return int(get_meta(session, USERS_REVISION, 1))


def _bump_revision(session: Session) -> None:
    set_meta(session, USERS_REVISION, _revision(session) + 1)
