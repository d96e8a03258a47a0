from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from docassist.classification.models import ContentRecord
from docassist.risk.models import RiskAssessment

DocumentStatus = Literal["processing", "completed", "error"]


@dataclass(frozen=True)
class UploadedFile:
    """Raw upload signals supplied by the upload surface."""

    name: str
    size_bytes: int
    mime_type: str


@dataclass(frozen=True)
class Document:
    """Snapshot of an uploaded document.

    Status moves once, from ``processing`` to ``completed`` (or ``error``).
    The score, summary and factors live on ``assessment`` so they appear
    together or not at all.
    """

    id: str
    name: str
    size_bytes: int
    mime_type: str
    uploaded_at: datetime
    content: ContentRecord
    status: DocumentStatus = "processing"
    assessment: RiskAssessment | None = None
    error_message: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed" and self.assessment is not None

    @property
    def risk_score(self) -> float | None:
        return self.assessment.risk_score if self.assessment else None

    @property
    def summary(self) -> str | None:
        return self.assessment.summary if self.assessment else None

    @property
    def risk_factors(self) -> tuple[str, ...] | None:
        return self.assessment.risk_factors if self.assessment else None


@dataclass(frozen=True)
class RegistryStats:
    """Dashboard counters over the registry."""

    total: int
    completed: int
    high_risk: int
    average_risk_score: float
