"""Keyword-cascade intent router.

Rules are evaluated against the lower-cased question, first match wins:

1. no active document -> prompt to select one
2. type-specific rules for the active document's profile
3. cross-type rules: summary, then fraud/risk/security
4. lookup phrases ("what is", "tell me about", "show me") scanned against
   key information
5. a randomly chosen contextual fallback
"""

import random
from typing import ClassVar

from docassist.chat import templates
from docassist.chat.formatting import render_value
from docassist.chat.models import BotReply, ChatContext
from docassist.classification.models import (
    ContractInfo,
    InvoiceInfo,
    ReportInfo,
    ResumeInfo,
    key_information_dict,
)
from docassist.logging.logger import Log


def _mentions(message: str, *keywords: str) -> bool:
    """True if any keyword occurs as a substring of the message."""
    return any(keyword in message for keyword in keywords)


class IntentRouter:
    """Selects and renders a reply for a free-text question."""

    NO_DOCUMENT_REPLY: ClassVar[str] = (
        "Please select a document first so I can help you analyze it."
    )
    LOOKUP_PHRASES: ClassVar[tuple[str, ...]] = ("what is", "tell me about", "show me")
    MIN_LOOKUP_TOKEN_LENGTH: ClassVar[int] = 4

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def respond(self, user_text: str, context: ChatContext | None) -> BotReply:
        """Route a question about the active document; ``None`` means nothing is selected."""
        if context is None:
            return BotReply(self.NO_DOCUMENT_REPLY, "text")

        message = user_text.lower()
        reply = (
            self._typed_reply(message, context)
            or self._generic_reply(message, context)
            or self._lookup_reply(message, context)
        )
        if reply is None:
            reply = self._fallback_reply(context)
            Log.debug("No intent matched, using fallback")
        return reply

    def _typed_reply(self, message: str, context: ChatContext) -> BotReply | None:
        info = context.content.key_information
        name = context.name
        if isinstance(info, ResumeInfo):
            return self._resume_reply(message, name, info)
        if isinstance(info, InvoiceInfo):
            return self._invoice_reply(message, name, info)
        if isinstance(info, ContractInfo):
            return self._contract_reply(message, name, info)
        if isinstance(info, ReportInfo):
            return self._report_reply(message, name, info)
        return None

    @staticmethod
    def _resume_reply(message: str, name: str, info: ResumeInfo) -> BotReply | None:
        if _mentions(message, "project"):
            return BotReply(templates.resume_projects(name, info), "analysis")
        if _mentions(message, "skill"):
            return BotReply(templates.resume_skills(name, info), "analysis")
        if _mentions(message, "experience", "work", "job"):
            return BotReply(templates.resume_experience(name, info), "analysis")
        if _mentions(message, "contact", "email", "phone"):
            return BotReply(templates.resume_contact(name, info), "summary")
        if _mentions(message, "education", "degree"):
            return BotReply(templates.resume_education(name, info), "analysis")
        return None

    @staticmethod
    def _invoice_reply(message: str, name: str, info: InvoiceInfo) -> BotReply | None:
        if _mentions(message, "amount", "total", "cost"):
            return BotReply(templates.invoice_amount(name, info), "analysis")
        if _mentions(message, "service", "item", "work"):
            return BotReply(templates.invoice_items(name, info), "analysis")
        if _mentions(message, "vendor", "client", "company"):
            return BotReply(templates.invoice_parties(name, info), "summary")
        return None

    @staticmethod
    def _contract_reply(message: str, name: str, info: ContractInfo) -> BotReply | None:
        if _mentions(message, "term", "condition", "clause"):
            return BotReply(templates.contract_terms(name, info), "analysis")
        if _mentions(message, "partie", "company", "organization"):
            return BotReply(templates.contract_parties(name, info), "summary")
        return None

    @staticmethod
    def _report_reply(message: str, name: str, info: ReportInfo) -> BotReply | None:
        if _mentions(message, "metric", "performance", "result"):
            return BotReply(templates.report_metrics(name, info), "analysis")
        if _mentions(message, "finding", "insight", "analysis"):
            return BotReply(templates.report_findings(name, info), "analysis")
        if _mentions(message, "recommend", "suggestion", "next step"):
            return BotReply(templates.report_recommendations(name, info), "analysis")
        return None

    @staticmethod
    def _generic_reply(message: str, context: ChatContext) -> BotReply | None:
        if _mentions(message, "summary", "summarize", "overview"):
            return BotReply(templates.summary(context), "summary")
        if _mentions(message, "fraud", "risk", "security"):
            return BotReply(templates.security(context), "analysis")
        return None

    def _lookup_reply(self, message: str, context: ChatContext) -> BotReply | None:
        if not _mentions(message, *self.LOOKUP_PHRASES):
            return None
        terms = [
            word for word in message.split(" ") if len(word) >= self.MIN_LOOKUP_TOKEN_LENGTH
        ]
        entries: list[tuple[str, str]] = []
        for key, value in key_information_dict(context.content.key_information).items():
            lowered_key = key.lower()
            if any(
                term in lowered_key or (isinstance(value, str) and term in value.lower())
                for term in terms
            ):
                entries.append((key, render_value(value)))
        if not entries:
            return None
        return BotReply(templates.lookup(context.name, entries), "analysis")

    def _fallback_reply(self, context: ChatContext) -> BotReply:
        return BotReply(self._rng.choice(templates.fallbacks(context)), "text")
