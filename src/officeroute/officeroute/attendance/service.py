from __future__ import annotations

import calendar
import logging
import threading
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, whole_minutes_between
from ..common.validators import require_int_between
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_HISTORY_LIMIT, RECENT_ACTIVITY_LIMIT
from ..core.enums import AttendanceState, AttendanceStatus, WorkMode
from ..core.exceptions import AttendanceError, InvalidState, Unexpected, ValidationError
from ..geofence.position_source import PositionSource
from ..sync.trigger import NullSyncTrigger, SyncTrigger
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceSummary, MonthlyStats
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Per-user, per-day check-in/check-out lifecycle.

    State for a (user, date) is always re-derived from the record collection:
    no record is NOT_CHECKED_IN, an open record is CHECKED_IN, a closed one is
    CHECKED_OUT. There is no transition out of CHECKED_OUT for that date.

    The "no record today" check and the insert are a read-then-write; the lock
    only serializes callers inside this process.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        sync_trigger: SyncTrigger | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._sync = sync_trigger or NullSyncTrigger()
        self._lock = threading.Lock()

    def find_open_record(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if record is not None and record.is_open:
            return record
        return None

    def get_today_record(self, user_id: str, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(user_id, today)

    def attendance_state(self, user_id: str, work_date: date) -> AttendanceState:
        record = self._attendance.get_for_user_and_date(user_id, work_date)
        if record is None:
            return AttendanceState.NOT_CHECKED_IN
        if record.is_open:
            return AttendanceState.CHECKED_IN
        return AttendanceState.CHECKED_OUT

    def check_in(
        self,
        user_id: str,
        work_mode: WorkMode,
        positions: PositionSource,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        try:
            with self._lock:
                record = self._check_in(user_id, work_mode, positions, now=now or now_local())
        except (AttendanceError, ValidationError):
            raise
        except Exception as exc:
            logger.exception("check-in failed for %s", user_id)
            raise Unexpected("Could not check in. Please try again.") from exc

        self._sync.trigger()
        return record

    def check_out(
        self,
        user_id: str,
        positions: PositionSource,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        try:
            with self._lock:
                record = self._check_out(user_id, positions, now=now or now_local())
        except (AttendanceError, ValidationError):
            raise
        except Exception as exc:
            logger.exception("check-out failed for %s", user_id)
            raise Unexpected("Could not check out. Please try again.") from exc

        self._sync.trigger()
        return record

    def _check_in(self, user_id: str, work_mode: WorkMode, positions: PositionSource, *, now: datetime) -> AttendanceRecord:
        today = now.date()

        user = self._users.get_by_id(user_id)
        if not user:
            raise ValidationError("Employee does not exist")

        if self._attendance.get_for_user_and_date(user_id, today) is not None:
            raise InvalidState("You have already checked in today")

        policy = self._factory.for_work_mode(work_mode)
        location = policy.checkin_location(user=user, positions=positions)
        decision = self._factory.for_checkin(now=now).decide_checkin(now=now)

        record = AttendanceRecord(
            id=uuid.uuid4().hex,
            user_id=user.id,
            employee_id=user.employee_id,
            employee_name=user.name,
            department=user.department,
            date=today,
            check_in_time=now,
            check_in_location=location,
            work_mode=work_mode,
            status=decision.status,
        )
        self._attendance.save(record)
        logger.info("%s checked in (%s, %s)", user.id, work_mode.value, decision.status.value)
        return record

    def _check_out(self, user_id: str, positions: PositionSource, *, now: datetime) -> AttendanceRecord:
        record = self.find_open_record(user_id, now.date())
        if record is None:
            raise InvalidState("You have no open check-in for today")

        location = self._factory.for_work_mode(record.work_mode).checkout_location(positions=positions)

        minutes = whole_minutes_between(record.check_in_time, now)
        if minutes < 0:
            logger.warning(
                "clock moved backwards for record %s (%d min); duration clamped to 0",
                record.id,
                minutes,
            )
            minutes = 0

        updated = replace(
            record,
            check_out_time=now,
            check_out_location=location,
            total_duration_minutes=minutes,
        )
        self._attendance.save(updated)
        logger.info("%s checked out after %d min", user_id, minutes)
        return updated

    def history_for_user(self, user_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        limit = require_int_between(limit, "limit", minimum=1, maximum=MAX_HISTORY_LIMIT)
        return self._attendance.get_recent_for_user(user_id, limit)

    def recent_records(self, *, limit: int = RECENT_ACTIVITY_LIMIT) -> Sequence[AttendanceRecord]:
        """Latest records across all users (admin activity feed)."""
        limit = require_int_between(limit, "limit", minimum=1, maximum=MAX_HISTORY_LIMIT)
        return self._attendance.get_recent(limit)

    def monthly_stats(self, user_id: str, today: date) -> MonthlyStats:
        last_day = calendar.monthrange(today.year, today.month)[1]
        records = self._attendance.list_between(user_id, today.replace(day=1), today.replace(day=last_day))
        minutes = sum(r.total_duration_minutes or 0 for r in records)
        return MonthlyStats(
            month=today.strftime("%Y-%m"),
            days_present=len(records),
            total_hours=round(minutes / 60, 1),
            lates=sum(1 for r in records if r.status == AttendanceStatus.LATE),
        )

    def today_summary(self, today: date) -> AttendanceSummary:
        eligible = {u.id for u in self._users.list_all() if u.is_attendance_eligible}
        todays = [r for r in self._attendance.list_all() if r.date == today and r.user_id in eligible]

        return AttendanceSummary(
            total_employees=len(eligible),
            present=len(todays),
            late=sum(1 for r in todays if r.status == AttendanceStatus.LATE),
            absent=max(0, len(eligible) - len(todays)),
            on_remote=sum(1 for r in todays if r.work_mode == WorkMode.HOME),
        )
