class SchedulerError(Exception):
    """Base exception for scheduled-task errors."""


class DuplicateTaskError(SchedulerError):
    """Raised when a task key is already pending."""


class SchedulerClosedError(SchedulerError):
    """Raised when scheduling on a scheduler that has been shut down."""
