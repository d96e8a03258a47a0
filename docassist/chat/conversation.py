import threading
from collections.abc import Callable

from docassist.chat.models import Message
from docassist.logging.logger import Log

MessageListener = Callable[[Message], None]


class ConversationLog:
    """Append-only message history for the active document context.

    Every ``reset`` starts a new generation. Appends may be tagged with the
    generation they were produced for and are refused once it is stale, so a
    late reply never lands in a newer conversation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: list[Message] = []
        self._generation = 0
        self._listeners: list[MessageListener] = []

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def append(self, message: Message, *, generation: int | None = None) -> bool:
        """Append a message. Returns False if ``generation`` is stale."""
        with self._lock:
            accepted = generation is None or generation == self._generation
            if accepted:
                self._messages.append(message)
        if not accepted:
            Log.debug("Dropped message for stale conversation", id=message.id)
            return False
        self._notify(message)
        return True

    def reset(self, seed: Message | None = None) -> int:
        """Replace the history with ``seed`` (or nothing). Returns the new generation."""
        with self._lock:
            self._generation += 1
            self._messages = [seed] if seed is not None else []
            generation = self._generation
        if seed is not None:
            self._notify(seed)
        return generation

    def messages(self) -> list[Message]:
        with self._lock:
            return list(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def subscribe(self, listener: MessageListener) -> Callable[[], None]:
        """Register a listener for appended messages; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, message: Message) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(message)
            except Exception as exc:
                Log.warning(f"Message listener failed: {exc}")
