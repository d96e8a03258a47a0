"""Placeholder fraud-risk assessor.

The score is drawn uniformly from [0, 100) and is intentionally unrelated
to the document's content. The factor list is the same for every document.
"""

import random
from typing import ClassVar

from docassist.classification.models import ContentRecord
from docassist.logging.logger import Log
from docassist.risk.base import BaseRiskAssessor
from docassist.risk.models import RiskAssessment


class RiskAssessor(BaseRiskAssessor):
    RISK_FACTORS: ClassVar[tuple[str, ...]] = (
        "Document metadata consistency verified",
        "Content structure analysis completed",
        "Digital signature validation performed",
        "Text pattern recognition applied",
    )
    SUMMARY_KEY_COUNT: ClassVar[int] = 3

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def assess(self, content: ContentRecord) -> RiskAssessment:
        score = self._rng.random() * 100
        assessment = RiskAssessment(
            risk_score=score,
            summary=self._summarize(content),
            risk_factors=self.RISK_FACTORS,
        )
        Log.debug("Assessed document", document_type=content.document_type, score=f"{score:.1f}")
        return assessment

    def _summarize(self, content: ContentRecord) -> str:
        keys = ", ".join(content.key_names()[: self.SUMMARY_KEY_COUNT])
        return (
            f"This {content.document_type or 'document'} has been analyzed for potential "
            f"fraud indicators. The document contains {len(content.text_content)} key "
            f"sections with structured information including {keys}."
        )
