from functools import partial

from docassist.chat import templates
from docassist.chat.conversation import ConversationLog
from docassist.chat.models import BotReply, ChatContext, Message
from docassist.chat.router import IntentRouter
from docassist.documents.models import Document
from docassist.documents.registry import DocumentRegistry
from docassist.logging.logger import Log
from docassist.scheduling.base import BaseScheduler


def typing_delay_ms(
    text: str,
    *,
    per_char_ms: int = 15,
    max_ms: int = 3000,
    base_ms: int = 800,
) -> int:
    """Simulated typing time: proportional to length, capped, plus a constant."""
    return min(len(text) * per_char_ms, max_ms) + base_ms


class ChatSession:
    """Conversation about the currently selected document.

    Replies are routed when the question is sent but revealed only after a
    simulated typing delay. Switching documents cancels pending replies and
    resets the log to a welcome message.
    """

    def __init__(
        self,
        registry: DocumentRegistry,
        router: IntentRouter,
        scheduler: BaseScheduler,
        *,
        log: ConversationLog | None = None,
        typing_per_char_ms: int = 15,
        typing_max_ms: int = 3000,
        typing_base_ms: int = 800,
    ) -> None:
        self._registry = registry
        self._router = router
        self._scheduler = scheduler
        self._log = log if log is not None else ConversationLog()
        self._typing_per_char_ms = typing_per_char_ms
        self._typing_max_ms = typing_max_ms
        self._typing_base_ms = typing_base_ms
        self._active_document_id: str | None = None

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def active_document_id(self) -> str | None:
        return self._active_document_id

    @property
    def is_typing(self) -> bool:
        return bool(self._scheduler.pending(self._task_group(self._log.generation)))

    def messages(self) -> list[Message]:
        return self._log.messages()

    def select_document(self, document_id: str | None) -> Document | None:
        """Make a document the conversation context.

        Returns the selected snapshot, or None when ``document_id`` is None or
        unknown, in which case the log is left empty.
        """
        self._cancel_pending_replies()
        document = self._registry.select(document_id) if document_id is not None else None
        if document is None:
            self._active_document_id = None
            self._log.reset()
            return None

        self._active_document_id = document.id
        seed = Message.from_bot(
            templates.welcome(document.content.document_type, document.name), "text"
        )
        generation = self._log.reset(seed)
        Log.info("Conversation reset", document_id=document.id, generation=generation)
        return document

    def send(self, text: str) -> Message | None:
        """Record a user question and schedule the routed reply.

        Blank input is ignored and returns None.
        """
        if not text.strip():
            return None

        question = Message.from_user(text)
        generation = self._log.generation
        self._log.append(question, generation=generation)

        reply = self._router.respond(text, self._context())
        delay_ms = typing_delay_ms(
            reply.text,
            per_char_ms=self._typing_per_char_ms,
            max_ms=self._typing_max_ms,
            base_ms=self._typing_base_ms,
        )
        self._scheduler.schedule(
            f"reply:{question.id}",
            delay_ms,
            partial(self._deliver, reply, generation),
            group=self._task_group(generation),
        )
        return question

    def quick_questions(self) -> list[str]:
        """Suggested questions for the active document, empty when none is selected."""
        document = self._active_document()
        if document is None:
            return []
        return templates.quick_questions(document.content.document_type)

    def close(self) -> None:
        """Cancel replies that have not been revealed yet."""
        self._cancel_pending_replies()

    def _context(self) -> ChatContext | None:
        document = self._active_document()
        return ChatContext.from_document(document) if document is not None else None

    def _active_document(self) -> Document | None:
        if self._active_document_id is None:
            return None
        return self._registry.get(self._active_document_id)

    def _deliver(self, reply: BotReply, generation: int) -> None:
        self._log.append(Message.from_bot(reply.text, reply.kind), generation=generation)

    def _cancel_pending_replies(self) -> None:
        self._scheduler.cancel_group(self._task_group(self._log.generation))

    @staticmethod
    def _task_group(generation: int) -> str:
        return f"conversation:{generation}"
