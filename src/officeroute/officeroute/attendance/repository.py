from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def locked(self) -> AbstractContextManager:
        """Keep other writers out while a read-merge-write is in progress."""

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        """All users, newest first."""

        raise NotImplementedError

    def list_between(self, user_id: str, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Records of one user with ``start <= date <= end``."""

        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> None:
        """Upsert by record id."""

        raise NotImplementedError

    def replace_all(self, records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError
