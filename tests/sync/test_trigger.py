from concurrent.futures import ThreadPoolExecutor

import pytest

from src.officeroute.officeroute.sync.model import SyncResult
from src.officeroute.officeroute.sync.trigger import BackgroundSyncTrigger, NullSyncTrigger
from tests.support import InMemorySyncSettings


class FakeReconciler:
    def __init__(self, result=None, error=None):
        self.result = result or SyncResult(True, "ok")
        self.error = error
        self.calls = 0

    def sync(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def executor():
    ex = ThreadPoolExecutor(max_workers=1)
    yield ex
    ex.shutdown(wait=True)


def test_no_url_means_no_background_sync(executor):
    reconciler = FakeReconciler()
    trigger = BackgroundSyncTrigger(reconciler, InMemorySyncSettings(""), executor=executor)

    assert trigger.trigger() is None
    assert reconciler.calls == 0


def test_runs_sync_in_background(executor):
    reconciler = FakeReconciler(SyncResult(False, "Cloud update failed: 503"))
    trigger = BackgroundSyncTrigger(reconciler, InMemorySyncSettings("https://script.google.com/x"), executor=executor)

    future = trigger.trigger()

    assert future.result(timeout=5) == SyncResult(False, "Cloud update failed: 503")
    assert reconciler.calls == 1


def test_crash_stays_in_the_background(executor):
    reconciler = FakeReconciler(error=RuntimeError("boom"))
    trigger = BackgroundSyncTrigger(reconciler, InMemorySyncSettings("https://script.google.com/x"), executor=executor)

    future = trigger.trigger()

    assert isinstance(future.exception(timeout=5), RuntimeError)


def test_trigger_after_shutdown_is_ignored():
    trigger = BackgroundSyncTrigger(FakeReconciler(), InMemorySyncSettings("https://script.google.com/x"))
    trigger.shutdown()
    assert trigger.trigger() is None


def test_null_trigger_does_nothing():
    assert NullSyncTrigger().trigger() is None
