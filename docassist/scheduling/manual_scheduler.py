import itertools
from dataclasses import dataclass

from docassist.logging.logger import Log
from docassist.scheduling.base import BaseScheduler, TaskCallback
from docassist.scheduling.exceptions import DuplicateTaskError, SchedulerClosedError


@dataclass
class _VirtualTask:
    key: str
    group: str
    due_ms: int
    sequence: int
    callback: TaskCallback


class ManualScheduler(BaseScheduler):
    """Virtual-clock scheduler driven explicitly by ``advance``.

    Nothing runs until the owner moves the clock. Due tasks fire in due-time
    order, ties broken by scheduling order. Useful for deterministic runs.
    """

    def __init__(self) -> None:
        self._now_ms = 0
        self._tasks: dict[str, _VirtualTask] = {}
        self._sequence = itertools.count()
        self._closed = False

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def schedule(
        self,
        key: str,
        delay_ms: int,
        callback: TaskCallback,
        *,
        group: str = "default",
    ) -> None:
        if self._closed:
            raise SchedulerClosedError(f"Cannot schedule '{key}': scheduler is shut down")
        if key in self._tasks:
            raise DuplicateTaskError(f"Task '{key}' is already pending")
        self._tasks[key] = _VirtualTask(
            key=key,
            group=group,
            due_ms=self._now_ms + delay_ms,
            sequence=next(self._sequence),
            callback=callback,
        )
        Log.debug("Scheduled task", key=key, group=group, delay_ms=delay_ms)

    def cancel(self, key: str) -> bool:
        return self._tasks.pop(key, None) is not None

    def cancel_group(self, group: str) -> int:
        keys = [key for key, task in self._tasks.items() if task.group == group]
        for key in keys:
            del self._tasks[key]
        return len(keys)

    def pending(self, group: str | None = None) -> list[str]:
        return [
            task.key
            for task in self._ordered()
            if group is None or task.group == group
        ]

    def shutdown(self) -> None:
        self._closed = True
        self._tasks.clear()

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward, firing every task that becomes due.

        Tasks scheduled by callbacks fire too if they fall inside the window.
        Returns the number of callbacks run.
        """
        target = self._now_ms + delta_ms
        fired = 0
        while True:
            due = [task for task in self._ordered() if task.due_ms <= target]
            if not due:
                break
            task = due[0]
            del self._tasks[task.key]
            self._now_ms = max(self._now_ms, task.due_ms)
            self._run(task)
            fired += 1
        self._now_ms = target
        return fired

    def run_all(self) -> int:
        """Fire every pending task, including ones scheduled along the way."""
        fired = 0
        while self._tasks:
            next_due = self._ordered()[0].due_ms
            fired += self.advance(max(0, next_due - self._now_ms))
        return fired

    def _ordered(self) -> list[_VirtualTask]:
        return sorted(self._tasks.values(), key=lambda task: (task.due_ms, task.sequence))

    def _run(self, task: _VirtualTask) -> None:
        try:
            task.callback()
        except Exception as exc:
            Log.error(f"Task {task.key} failed: {exc}")
