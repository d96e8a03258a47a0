import pytest

from docassist.scheduling.exceptions import DuplicateTaskError, SchedulerClosedError
from docassist.scheduling.manual_scheduler import ManualScheduler


class TestAdvance:
    def test_nothing_runs_before_due(self) -> None:
        scheduler = ManualScheduler()
        fired: list[str] = []
        scheduler.schedule("a", 100, lambda: fired.append("a"))
        assert scheduler.advance(99) == 0
        assert fired == []
        assert scheduler.pending() == ["a"]

    def test_fires_in_due_order(self) -> None:
        scheduler = ManualScheduler()
        fired: list[str] = []
        scheduler.schedule("late", 300, lambda: fired.append("late"))
        scheduler.schedule("early", 100, lambda: fired.append("early"))
        scheduler.schedule("tie", 100, lambda: fired.append("tie"))
        assert scheduler.advance(300) == 3
        assert fired == ["early", "tie", "late"]
        assert scheduler.now_ms == 300

    def test_clock_is_due_time_inside_callback(self) -> None:
        scheduler = ManualScheduler()
        seen: list[int] = []
        scheduler.schedule("a", 150, lambda: seen.append(scheduler.now_ms))
        scheduler.advance(1000)
        assert seen == [150]

    def test_callback_scheduled_task_fires_within_window(self) -> None:
        scheduler = ManualScheduler()
        fired: list[str] = []

        def first() -> None:
            fired.append("first")
            scheduler.schedule("second", 50, lambda: fired.append("second"))

        scheduler.schedule("first", 100, first)
        scheduler.advance(149)
        assert fired == ["first"]
        scheduler.advance(1)
        assert fired == ["first", "second"]

    def test_run_all(self) -> None:
        scheduler = ManualScheduler()
        fired: list[str] = []
        scheduler.schedule("a", 5000, lambda: fired.append("a"))
        scheduler.schedule("b", 10, lambda: scheduler.schedule("c", 10_000, lambda: fired.append("c")))
        assert scheduler.run_all() == 3
        assert fired == ["a", "c"]
        assert scheduler.pending() == []

    def test_failing_callback_does_not_stop_others(self) -> None:
        scheduler = ManualScheduler()
        fired: list[str] = []

        def boom() -> None:
            raise RuntimeError("boom")

        scheduler.schedule("bad", 10, boom)
        scheduler.schedule("good", 20, lambda: fired.append("good"))
        assert scheduler.advance(20) == 2
        assert fired == ["good"]


class TestCancel:
    def test_cancel_prevents_callback(self) -> None:
        scheduler = ManualScheduler()
        fired: list[str] = []
        scheduler.schedule("a", 10, lambda: fired.append("a"))
        assert scheduler.cancel("a") is True
        scheduler.advance(100)
        assert fired == []

    def test_cancel_unknown(self) -> None:
        assert ManualScheduler().cancel("nope") is False

    def test_cancel_group(self) -> None:
        scheduler = ManualScheduler()
        scheduler.schedule("a", 10, lambda: None, group="g1")
        scheduler.schedule("b", 10, lambda: None, group="g1")
        scheduler.schedule("c", 10, lambda: None, group="g2")
        assert scheduler.cancel_group("g1") == 2
        assert scheduler.pending() == ["c"]
        assert scheduler.pending("g2") == ["c"]
        assert scheduler.pending("g1") == []

    def test_key_reusable_after_fire(self) -> None:
        scheduler = ManualScheduler()
        scheduler.schedule("a", 10, lambda: None)
        scheduler.advance(10)
        scheduler.schedule("a", 10, lambda: None)
        assert scheduler.pending() == ["a"]


class TestErrors:
    def test_duplicate_key(self) -> None:
        scheduler = ManualScheduler()
        scheduler.schedule("a", 10, lambda: None)
        with pytest.raises(DuplicateTaskError):
            scheduler.schedule("a", 20, lambda: None)

    def test_schedule_after_shutdown(self) -> None:
        scheduler = ManualScheduler()
        scheduler.schedule("a", 10, lambda: None)
        scheduler.shutdown()
        assert scheduler.pending() == []
        with pytest.raises(SchedulerClosedError):
            scheduler.schedule("b", 10, lambda: None)
