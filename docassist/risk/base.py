from abc import ABC, abstractmethod

from docassist.classification.models import ContentRecord
from docassist.risk.models import RiskAssessment


class BaseRiskAssessor(ABC):
    """Contract for all risk assessors."""

    @abstractmethod
    def assess(self, content: ContentRecord) -> RiskAssessment:
        """Produce a score, narrative summary and risk factors for a document.

        Args:
            content: The document's classified content.

        Returns:
            RiskAssessment with all three fields set together.
        """
