from abc import ABC, abstractmethod
from collections.abc import Callable

TaskCallback = Callable[[], None]


class BaseScheduler(ABC):
    """Contract for one-shot delayed tasks, keyed and grouped for cancellation."""

    @abstractmethod
    def schedule(
        self,
        key: str,
        delay_ms: int,
        callback: TaskCallback,
        *,
        group: str = "default",
    ) -> None:
        """Run ``callback`` once after ``delay_ms`` milliseconds.

        Raises:
            DuplicateTaskError: if ``key`` is already pending.
            SchedulerClosedError: if the scheduler has been shut down.
        """

    @abstractmethod
    def cancel(self, key: str) -> bool:
        """Cancel a pending task. Returns False if it is unknown or already fired."""

    @abstractmethod
    def cancel_group(self, group: str) -> int:
        """Cancel every pending task of a group. Returns how many were cancelled."""

    @abstractmethod
    def pending(self, group: str | None = None) -> list[str]:
        """Keys of pending tasks, optionally restricted to one group."""

    @abstractmethod
    def shutdown(self) -> None:
        """Cancel everything and refuse new tasks."""
