import threading
from dataclasses import dataclass

from docassist.logging.logger import Log
from docassist.scheduling.base import BaseScheduler, TaskCallback
from docassist.scheduling.exceptions import DuplicateTaskError, SchedulerClosedError


@dataclass
class _TimerTask:
    group: str
    timer: threading.Timer


class ThreadTimerScheduler(BaseScheduler):
    """Runs each task on its own daemon ``threading.Timer``.

    A task leaves the pending table under the lock before its callback runs,
    so a successful ``cancel`` guarantees the callback never starts.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: dict[str, _TimerTask] = {}
        self._closed = False

    def schedule(
        self,
        key: str,
        delay_ms: int,
        callback: TaskCallback,
        *,
        group: str = "default",
    ) -> None:
        timer = threading.Timer(delay_ms / 1000, self._fire, args=(key, callback))
        timer.daemon = True
        timer.name = f"task-{key}"
        with self._lock:
            if self._closed:
                raise SchedulerClosedError(f"Cannot schedule '{key}': scheduler is shut down")
            if key in self._tasks:
                raise DuplicateTaskError(f"Task '{key}' is already pending")
            self._tasks[key] = _TimerTask(group=group, timer=timer)
            timer.start()
        Log.debug("Scheduled task", key=key, group=group, delay_ms=delay_ms)

    def cancel(self, key: str) -> bool:
        with self._lock:
            task = self._tasks.pop(key, None)
        if task is None:
            return False
        task.timer.cancel()
        Log.debug("Cancelled task", key=key)
        return True

    def cancel_group(self, group: str) -> int:
        with self._lock:
            keys = [key for key, task in self._tasks.items() if task.group == group]
            tasks = [self._tasks.pop(key) for key in keys]
        for task in tasks:
            task.timer.cancel()
        if tasks:
            Log.debug("Cancelled task group", group=group, count=len(tasks))
        return len(tasks)

    def pending(self, group: str | None = None) -> list[str]:
        with self._lock:
            return [
                key
                for key, task in self._tasks.items()
                if group is None or task.group == group
            ]

    def shutdown(self) -> None:
        with self._lock:
            self._closed = True
            tasks = list(self._tasks.values())
            self._tasks.clear()
        for task in tasks:
            task.timer.cancel()
        Log.debug("Scheduler shut down", cancelled=len(tasks))

    def _fire(self, key: str, callback: TaskCallback) -> None:
        with self._lock:
            task = self._tasks.get(key)
            # A reused key belongs to a newer timer.
            if task is None or task.timer is not threading.current_thread():
                return
            del self._tasks[key]
        try:
            callback()
        except Exception as exc:
            Log.error(f"Task {key} failed: {exc}")
