import random
from datetime import datetime, timezone

import pytest

from docassist.chat.models import ChatContext
from docassist.chat.router import IntentRouter
from docassist.chat.session import ChatSession
from docassist.classification.classifier import ContentClassifier
from docassist.documents.registry import DocumentRegistry
from docassist.risk.assessor import RiskAssessor
from docassist.scheduling.manual_scheduler import ManualScheduler

UPLOAD_TIME = datetime(2024, 3, 7, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def upload_time() -> datetime:
    return UPLOAD_TIME


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def classifier(rng: random.Random) -> ContentClassifier:
    return ContentClassifier(rng=rng)


@pytest.fixture()
def registry(
    classifier: ContentClassifier,
    scheduler: ManualScheduler,
    rng: random.Random,
) -> DocumentRegistry:
    return DocumentRegistry(
        classifier=classifier,
        assessor=RiskAssessor(rng=rng),
        scheduler=scheduler,
        rng=rng,
        clock=lambda: UPLOAD_TIME,
    )


@pytest.fixture()
def router(rng: random.Random) -> IntentRouter:
    return IntentRouter(rng=rng)


@pytest.fixture()
def session(
    registry: DocumentRegistry,
    router: IntentRouter,
    scheduler: ManualScheduler,
) -> ChatSession:
    return ChatSession(registry, router, scheduler)


@pytest.fixture()
def make_context(classifier: ContentClassifier):
    """Build a ChatContext for a filename, optionally with a completed assessment."""

    def _make(
        filename: str,
        *,
        size_bytes: int = 2048,
        risk_score: float | None = None,
        risk_factors: tuple[str, ...] | None = None,
    ) -> ChatContext:
        return ChatContext(
            name=filename,
            size_bytes=size_bytes,
            uploaded_at=UPLOAD_TIME,
            content=classifier.classify(filename, size_bytes, "application/pdf"),
            risk_score=risk_score,
            risk_factors=risk_factors,
        )

    return _make
