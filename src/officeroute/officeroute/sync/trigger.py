"""Fire-and-forget sync after local mutations.

Attendance and employee operations never wait for the outcome and never see
its failure; it is only logged.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from .reconciler import SyncReconciler
    from .repository import SyncSettingsRepository

logger = logging.getLogger(__name__)


class SyncTrigger(Protocol):
    def trigger(self) -> Optional[Future]:
        raise NotImplementedError


class NullSyncTrigger:
    """Used when auto-sync is disabled."""

    def trigger(self) -> Optional[Future]:
        return None


class BackgroundSyncTrigger:
    def __init__(
        self,
        reconciler: "SyncReconciler",
        settings: "SyncSettingsRepository",
        *,
        executor: ThreadPoolExecutor | None = None,
    ):
        self._reconciler = reconciler
        self._settings = settings
        # One worker: background syncs run one after another.
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="officeroute-sync")

    def trigger(self) -> Optional[Future]:
        if not self._settings.get_cloud_url():
            return None
        try:
            future = self._executor.submit(self._reconciler.sync)
        except RuntimeError:
            logger.warning("background sync skipped: executor is shut down")
            return None
        future.add_done_callback(_log_outcome)
        return future

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False)


def _log_outcome(future: Future) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error("background sync crashed", exc_info=exc)
        return
    result = future.result()
    if result.success:
        logger.info("background sync: %s", result.message)
    else:
        logger.warning("background sync: %s", result.message)
