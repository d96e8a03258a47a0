import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from docassist.classification.models import ContentRecord
from docassist.documents.models import Document

MessageSender = Literal["user", "bot"]
MessageKind = Literal["text", "summary", "analysis"]


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class Message:
    """A single conversation entry. ``kind`` is set on bot messages only."""

    id: str
    content: str
    sender: MessageSender
    timestamp: datetime
    kind: MessageKind | None = None

    @classmethod
    def from_user(cls, content: str) -> "Message":
        return cls(id=uuid.uuid4().hex, content=content, sender="user", timestamp=_now())

    @classmethod
    def from_bot(cls, content: str, kind: MessageKind = "text") -> "Message":
        return cls(
            id=uuid.uuid4().hex,
            content=content,
            sender="bot",
            timestamp=_now(),
            kind=kind,
        )


@dataclass(frozen=True)
class BotReply:
    """Routed response, before it is turned into a Message."""

    text: str
    kind: MessageKind


@dataclass(frozen=True)
class ChatContext:
    """What the intent router may read about the active document."""

    name: str
    size_bytes: int
    uploaded_at: datetime
    content: ContentRecord
    risk_score: float | None = None
    risk_factors: tuple[str, ...] | None = None

    @classmethod
    def from_document(cls, document: Document) -> "ChatContext":
        return cls(
            name=document.name,
            size_bytes=document.size_bytes,
            uploaded_at=document.uploaded_at,
            content=document.content,
            risk_score=document.risk_score,
            risk_factors=document.risk_factors,
        )
