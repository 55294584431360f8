from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.sql_base import db_session, get_meta, set_meta
from .repository import SyncSettingsRepository

CLOUD_URL = "cloud_url"


class SqlSyncSettingsRepository(SyncSettingsRepository):
    """Cloud URL kept in the meta table; ``default_url`` comes from config."""

    def __init__(self, conn: DatabaseConnection, *, default_url: str = ""):
        self._conn = conn
        self._default_url = default_url

    def get_cloud_url(self) -> str:
        with db_session(self._conn) as session:
            return str(get_meta(session, CLOUD_URL) or self._default_url or "")

    def set_cloud_url(self, url: str) -> None:
        with db_session(self._conn) as session:
            set_meta(session, CLOUD_URL, url.strip())
