"""Pull-merge-push reconciliation with the remote store.

A sync either reports success or the reason it stopped. It is not
transactional: once the local commit happened, a failed push does not undo it.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

import requests

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_SYNC_PROVIDER_DOMAIN, DEFAULT_SYNC_TIMEOUT_SECONDS
from ..core.exceptions import EndpointPermissionError, NetworkError
from ..users.model import User
from ..users.repository import UserRepository
from .client import CloudClient
from .model import Snapshot, SyncResult
from .repository import SyncSettingsRepository

logger = logging.getLogger(__name__)

MSG_NO_URL = "No Cloud URL configured."
MSG_INVALID_URL = "Invalid URL. Please check Sync settings."
MSG_SUCCESS = "Sync Complete (Data Restored & Saved)."
MSG_PERMISSION = (
    "Sync Failed: Permission Error. Ensure the endpoint is reachable "
    "and deployed for anonymous access ('Anyone')."
)


def merge_users(local: Sequence[User], remote: Sequence[User], *, local_is_default: bool) -> list[User]:
    """Dedup by id, remote first.

    A device still holding the factory users must not clobber a populated
    remote: its users only go in when the remote contributed nothing.
    """
    merged: dict[str, User] = {u.id: u for u in remote}
    if not local_is_default or not merged:
        for u in local:
            merged[u.id] = u
    return list(merged.values())


def merge_attendance(local: Sequence[AttendanceRecord], remote: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
    """Dedup by id; the local copy always wins."""
    merged: dict[str, AttendanceRecord] = {r.id: r for r in remote}
    for r in local:
        merged[r.id] = r
    return list(merged.values())


def is_valid_endpoint(endpoint: str, provider_domain: str) -> bool:
    """Coarse check only, not a security boundary."""
    return provider_domain in endpoint


class SyncReconciler:
    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        settings: SyncSettingsRepository,
        *,
        provider_domain: str = DEFAULT_SYNC_PROVIDER_DOMAIN,
        timeout: float = DEFAULT_SYNC_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._users = users
        self._attendance = attendance
        self._settings = settings
        self._provider_domain = provider_domain
        self._timeout = float(timeout)
        self._session = session or requests.Session()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = threading.Lock()

    def sync(self, endpoint: Optional[str] = None) -> SyncResult:
        endpoint = (endpoint if endpoint is not None else self._settings.get_cloud_url()).strip()
        if not endpoint:
            return SyncResult(False, MSG_NO_URL)
        if not is_valid_endpoint(endpoint, self._provider_domain):
            return SyncResult(False, MSG_INVALID_URL)

        client = CloudClient(endpoint, timeout=self._timeout, session=self._session)
        with self._lock:
            try:
                return self._reconcile(client)
            except EndpointPermissionError as exc:
                logger.error("sync endpoint unreachable: %s", exc)
                return SyncResult(False, MSG_PERMISSION)
            except Exception as exc:
                logger.exception("sync failed")
                return SyncResult(False, f"Network error: {exc or 'Unknown'}")

    def _reconcile(self, client: CloudClient) -> SyncResult:
        remote = self._pull(client)

        # Check-ins saved while the merge runs must not be overwritten by it.
        with self._users.locked(), self._attendance.locked():
            local_users = self._users.list_all()
            local_is_default = self._users.revision() == 0
            merged_users = merge_users(local_users, remote.users, local_is_default=local_is_default)
            merged_attendance = merge_attendance(self._attendance.list_all(), remote.attendance)

            # Replace in full; the revision stays at 0 only while nothing but the
            # factory users have ever been seen.
            self._users.replace_all(merged_users, mark_modified=not local_is_default or bool(remote.users))
            self._attendance.replace_all(merged_attendance)
        logger.info(
            "merged %d users and %d attendance records (remote had %d/%d)",
            len(merged_users),
            len(merged_attendance),
            len(remote.users),
            len(remote.attendance),
        )

        payload = {
            "users": [u.to_dict() for u in merged_users],
            "attendance": [r.to_dict() for r in merged_attendance],
            "lastSync": self._clock().isoformat(),
        }
        try:
            response = client.push(payload)
        except requests.ConnectionError as exc:
            raise EndpointPermissionError(str(exc)) from exc
        except requests.RequestException as exc:
            raise NetworkError(str(exc)) from exc

        if not response.ok:
            logger.warning("push rejected with HTTP %s", response.status_code)
            return SyncResult(False, f"Cloud update failed: {response.status_code}")
        return SyncResult(True, MSG_SUCCESS)

    def _pull(self, client: CloudClient) -> Snapshot:
        try:
            return client.pull()
        except (requests.RequestException, ValueError) as exc:
            logger.warning("could not fetch cloud data, continuing with local data only: %s", exc)
            return Snapshot()
