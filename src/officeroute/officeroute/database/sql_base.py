from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Type

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .connection import DatabaseConnection
from .tables import MetaRow


@contextmanager
def db_session(conn: DatabaseConnection) -> Iterator[Session]:
    """One unit of work: commit on success, roll back on any error."""
    with conn.locked():
        session = conn.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


def next_seq(session: Session, model: Type[Any]) -> int:
    current = session.execute(select(func.max(model.seq))).scalar()
    return int(current or 0) + 1


def get_meta(session: Session, key: str, default: Any = None) -> Any:
    row = session.get(MetaRow, key)
    return row.value if row is not None else default


def set_meta(session: Session, key: str, value: Any) -> None:
    session.merge(MetaRow(key=key, value=value))
