from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests

from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .attendance.sql_attendance_repository import SqlAttendanceRepository
from .core.constants import (
    DEFAULT_LATE_AFTER_HOUR,
    DEFAULT_POSITION_TIMEOUT_SECONDS,
    DEFAULT_SYNC_PROVIDER_DOMAIN,
    DEFAULT_SYNC_TIMEOUT_SECONDS,
)
from .database.bootstrap import ensure_bootstrap_data
from .database.connection import DatabaseConnection, open_database
from .geofence.position_source import PositionOptions
from .insights.provider import GeminiProvider
from .insights.service import InsightService
from .sync.reconciler import SyncReconciler
from .sync.sql_settings_repository import SqlSyncSettingsRepository
from .sync.trigger import BackgroundSyncTrigger, NullSyncTrigger, SyncTrigger
from .users.service import UserService
from .users.sql_user_repository import SqlUserRepository


@dataclass(frozen=True)
class Container:
    db: DatabaseConnection

    users_repo: SqlUserRepository
    attendance_repo: SqlAttendanceRepository
    sync_settings_repo: SqlSyncSettingsRepository

    position_options: PositionOptions

    user_service: UserService
    attendance_service: AttendanceService
    sync_reconciler: SyncReconciler
    sync_trigger: SyncTrigger
    insight_service: InsightService


def build_container(*, settings: dict[str, Any], http_session: Optional[requests.Session] = None) -> Container:
    db = open_database(settings["DATABASE_URL"], shared=not settings.get("TESTING", False))
    ensure_bootstrap_data(
        db,
        admin_password=str(settings.get("BOOTSTRAP_ADMIN_PASSWORD", "admin123")),
        employee_password=str(settings.get("BOOTSTRAP_EMPLOYEE_PASSWORD", "staff123")),
    )

    users_repo = SqlUserRepository(db)
    attendance_repo = SqlAttendanceRepository(db)
    sync_settings_repo = SqlSyncSettingsRepository(db, default_url=str(settings.get("CLOUD_URL") or ""))

    sync_reconciler = SyncReconciler(
        users_repo,
        attendance_repo,
        sync_settings_repo,
        provider_domain=str(settings.get("SYNC_PROVIDER_DOMAIN") or DEFAULT_SYNC_PROVIDER_DOMAIN),
        timeout=float(settings.get("SYNC_TIMEOUT_SECONDS", DEFAULT_SYNC_TIMEOUT_SECONDS)),
        session=http_session,
    )
    sync_trigger: SyncTrigger
    if settings.get("AUTO_SYNC", True):
        sync_trigger = BackgroundSyncTrigger(sync_reconciler, sync_settings_repo)
    else:
        sync_trigger = NullSyncTrigger()

    user_service = UserService(users_repo, sync_trigger=sync_trigger)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        strategy_factory=AttendanceStrategyFactory(
            late_after_hour=int(settings.get("LATE_AFTER_HOUR", DEFAULT_LATE_AFTER_HOUR)),
        ),
        sync_trigger=sync_trigger,
    )

    api_key = settings.get("GEMINI_API_KEY")
    provider = GeminiProvider(str(api_key), model=str(settings.get("GEMINI_MODEL", "gemini-2.5-flash"))) if api_key else None
    insight_service = InsightService(provider)

    return Container(
        db=db,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        sync_settings_repo=sync_settings_repo,
        position_options=PositionOptions(
            timeout_seconds=float(settings.get("POSITION_TIMEOUT_SECONDS", DEFAULT_POSITION_TIMEOUT_SECONDS)),
        ),
        user_service=user_service,
        attendance_service=attendance_service,
        sync_reconciler=sync_reconciler,
        sync_trigger=sync_trigger,
        insight_service=insight_service,
    )
