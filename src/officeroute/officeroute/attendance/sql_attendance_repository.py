from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import date
from typing import Optional, Sequence

from sqlalchemy import delete, select

from ..database.connection import DatabaseConnection
from ..database.sql_base import db_session, next_seq
from ..database.tables import AttendanceRow
from .model import AttendanceRecord
from .repository import AttendanceRepository


class SqlAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def locked(self) -> AbstractContextManager:
        return self._conn.locked()

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_session(self._conn) as session:
            rows = session.scalars(select(AttendanceRow).order_by(AttendanceRow.seq)).all()
            return [AttendanceRecord.from_dict(r.payload) for r in rows]

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_session(self._conn) as session:
            row = session.get(AttendanceRow, record_id)
            return AttendanceRecord.from_dict(row.payload) if row else None

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_session(self._conn) as session:
            row = session.scalars(
                select(AttendanceRow)
                .where(AttendanceRow.user_id == user_id, AttendanceRow.work_date == work_date)
                .order_by(AttendanceRow.seq)
                .limit(1)
            ).first()
            return AttendanceRecord.from_dict(row.payload) if row else None

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_session(self._conn) as session:
            rows = session.scalars(
                select(AttendanceRow)
                .where(AttendanceRow.user_id == user_id)
                .order_by(AttendanceRow.work_date.desc(), AttendanceRow.check_in_ts.desc())
                .limit(int(limit))
            ).all()
            return [AttendanceRecord.from_dict(r.payload) for r in rows]

    def get_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_session(self._conn) as session:
            rows = session.scalars(
                select(AttendanceRow)
                .order_by(AttendanceRow.work_date.desc(), AttendanceRow.check_in_ts.desc())
                .limit(int(limit))
            ).all()
            return [AttendanceRecord.from_dict(r.payload) for r in rows]

    def list_between(self, user_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_session(self._conn) as session:
            rows = session.scalars(
                select(AttendanceRow)
                .where(
                    AttendanceRow.user_id == user_id,
                    AttendanceRow.work_date >= start,
                    AttendanceRow.work_date <= end,
                )
                .order_by(AttendanceRow.work_date)
            ).all()
            return [AttendanceRecord.from_dict(r.payload) for r in rows]

    def save(self, record: AttendanceRecord) -> None:
        with db_session(self._conn) as session:
            row = session.get(AttendanceRow, record.id)
            if row is None:
                session.add(_to_row(record, next_seq(session, AttendanceRow)))
            else:
                row.user_id = record.user_id
                row.work_date = record.date
                row.check_in_ts = record.check_in_time.timestamp()
                row.payload = record.to_dict()

    def replace_all(self, records: Sequence[AttendanceRecord]) -> None:
        with db_session(self._conn) as session:
            session.execute(delete(AttendanceRow))
            for seq, record in enumerate(records, start=1):
                session.add(_to_row(record, seq))


def _to_row(record: AttendanceRecord, seq: int) -> AttendanceRow:
    return AttendanceRow(
        id=record.id,
        seq=seq,
        user_id=record.user_id,
        work_date=record.date,
        check_in_ts=record.check_in_time.timestamp(),
        payload=record.to_dict(),
    )
