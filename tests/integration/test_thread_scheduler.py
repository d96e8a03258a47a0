import threading

import pytest

from docassist.scheduling.exceptions import DuplicateTaskError, SchedulerClosedError
from docassist.scheduling.thread_scheduler import ThreadTimerScheduler

WAIT_SECONDS = 2.0


@pytest.fixture()
def scheduler():
    scheduler = ThreadTimerScheduler()
    yield scheduler
    scheduler.shutdown()


@pytest.mark.integration
class TestThreadTimerScheduler:
    def test_callback_fires(self, scheduler: ThreadTimerScheduler) -> None:
        fired = threading.Event()
        scheduler.schedule("a", 10, fired.set)
        assert fired.wait(WAIT_SECONDS)

    def test_fired_task_leaves_pending(self, scheduler: ThreadTimerScheduler) -> None:
        done = threading.Event()
        scheduler.schedule("a", 10, done.set, group="g")
        assert scheduler.pending("g") == ["a"]
        assert done.wait(WAIT_SECONDS)
        assert scheduler.pending("g") == []

    def test_cancel_prevents_callback(self, scheduler: ThreadTimerScheduler) -> None:
        fired = threading.Event()
        scheduler.schedule("a", 200, fired.set)
        assert scheduler.cancel("a") is True
        assert not fired.wait(0.4)
        assert scheduler.cancel("a") is False

    def test_cancel_group(self, scheduler: ThreadTimerScheduler) -> None:
        fired = threading.Event()
        kept = threading.Event()
        scheduler.schedule("a", 200, fired.set, group="chat")
        scheduler.schedule("b", 200, fired.set, group="chat")
        scheduler.schedule("c", 50, kept.set, group="docs")

        assert scheduler.cancel_group("chat") == 2
        assert kept.wait(WAIT_SECONDS)
        assert not fired.wait(0.3)

    def test_duplicate_key(self, scheduler: ThreadTimerScheduler) -> None:
        scheduler.schedule("a", 1000, lambda: None)
        with pytest.raises(DuplicateTaskError):
            scheduler.schedule("a", 1000, lambda: None)

    def test_failing_callback_is_contained(self, scheduler: ThreadTimerScheduler) -> None:
        after = threading.Event()

        def boom() -> None:
            raise RuntimeError("boom")

        scheduler.schedule("bad", 10, boom)
        scheduler.schedule("good", 50, after.set)
        assert after.wait(WAIT_SECONDS)

    def test_shutdown(self, scheduler: ThreadTimerScheduler) -> None:
        fired = threading.Event()
        scheduler.schedule("a", 200, fired.set)
        scheduler.shutdown()
        assert scheduler.pending() == []
        assert not fired.wait(0.4)
        with pytest.raises(SchedulerClosedError):
            scheduler.schedule("b", 10, fired.set)
