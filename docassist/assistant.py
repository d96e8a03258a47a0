import random
from dataclasses import dataclass

from docassist.chat.router import IntentRouter
from docassist.chat.session import ChatSession
from docassist.classification.classifier import ContentClassifier
from docassist.config.settings import Settings
from docassist.documents.registry import DocumentRegistry
from docassist.risk.assessor import RiskAssessor
from docassist.scheduling.base import BaseScheduler
from docassist.scheduling.factory import SchedulerFactory


@dataclass
class Assistant:
    """The wired core: registry, chat session and the scheduler they share."""

    registry: DocumentRegistry
    session: ChatSession
    scheduler: BaseScheduler

    def shutdown(self) -> None:
        self.session.close()
        self.scheduler.shutdown()


def build_assistant(
    settings: Settings,
    scheduler: BaseScheduler | None = None,
    rng: random.Random | None = None,
) -> Assistant:
    """Build an Assistant with all collaborators configured from settings."""
    if rng is None:
        rng = random.Random(settings.random_seed)
    if scheduler is None:
        scheduler = SchedulerFactory.create(settings)

    registry = DocumentRegistry(
        classifier=ContentClassifier(rng=rng, profiles_dir=settings.profiles_dir),
        assessor=RiskAssessor(rng=rng),
        scheduler=scheduler,
        processing_delay_min_ms=settings.processing_delay_min_ms,
        processing_delay_max_ms=settings.processing_delay_max_ms,
        rng=rng,
    )
    session = ChatSession(
        registry,
        IntentRouter(rng=rng),
        scheduler,
        typing_per_char_ms=settings.typing_delay_per_char_ms,
        typing_max_ms=settings.typing_delay_max_ms,
        typing_base_ms=settings.typing_delay_base_ms,
    )
    return Assistant(registry=registry, session=session, scheduler=scheduler)
