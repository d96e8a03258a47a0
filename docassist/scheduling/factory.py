from docassist.config.settings import Settings
from docassist.scheduling.base import BaseScheduler
from docassist.scheduling.manual_scheduler import ManualScheduler
from docassist.scheduling.thread_scheduler import ThreadTimerScheduler


class SchedulerFactory:
    """Creates the scheduler backend named in settings."""

    BACKENDS: dict[str, type[BaseScheduler]] = {
        "thread": ThreadTimerScheduler,
        "manual": ManualScheduler,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseScheduler:
        backend = settings.scheduler_backend.lower()
        scheduler_cls = cls.BACKENDS.get(backend)
        if scheduler_cls is None:
            raise ValueError(
                f"Unknown scheduler backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
            )
        return scheduler_cls()
