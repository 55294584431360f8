"""HTTP access to the remote sync endpoint.

The endpoint answers GET with ``{"status": "success", "data": {"users": [...],
"attendance": [...]}}`` and stores the body of a POST verbatim.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

import requests

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_SYNC_TIMEOUT_SECONDS
from ..users.model import User
from .model import Snapshot

logger = logging.getLogger(__name__)


class CloudClient:
    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = DEFAULT_SYNC_TIMEOUT_SECONDS,
        session: requests.Session,
    ):
        self._endpoint = endpoint
        self._timeout = timeout
        self._session = session

    def pull(self) -> Snapshot:
        """GET the remote snapshot. Network and decode errors propagate."""
        response = self._session.get(self._endpoint, timeout=self._timeout, allow_redirects=True)
        if not response.ok:
            logger.warning("pull returned HTTP %s; treating remote as empty", response.status_code)
            return Snapshot()

        body = response.json()
        if not isinstance(body, dict) or body.get("status") != "success" or not body.get("data"):
            return Snapshot()
        return parse_snapshot(body["data"])

    def push(self, payload: dict[str, Any]) -> requests.Response:
        # text/plain keeps the request "simple" for the script host.
        return self._session.post(
            self._endpoint,
            data=json.dumps(payload),
            headers={"Content-Type": "text/plain"},
            timeout=self._timeout,
            allow_redirects=True,
        )


def parse_snapshot(data: Any) -> Snapshot:
    if not isinstance(data, dict):
        return Snapshot()
    return Snapshot(
        users=tuple(_parse_rows(data.get("users"), User.from_dict, "user")),
        attendance=tuple(_parse_rows(data.get("attendance"), AttendanceRecord.from_dict, "attendance")),
    )


def _parse_rows(rows: Any, parse, kind: str) -> Iterable:
    if not isinstance(rows, list):
        return
    for row in rows:
        try:
            yield parse(row)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("skipping malformed remote %s row: %s", kind, exc)
