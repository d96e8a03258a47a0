import random
from unittest.mock import MagicMock

import pytest

from docassist.classification.classifier import ContentClassifier
from docassist.risk.assessor import RiskAssessor
from docassist.risk.bands import HIGH_RISK, LOW_RISK, MEDIUM_RISK, risk_label


class TestRiskScore:
    def test_score_in_range(self, classifier: ContentClassifier) -> None:
        assessor = RiskAssessor(rng=random.Random(3))
        content = classifier.classify("resume.pdf", 1, "")
        for _ in range(500):
            score = assessor.assess(content).risk_score
            assert 0 <= score < 100

    def test_score_comes_from_rng(self, classifier: ContentClassifier) -> None:
        rng = MagicMock()
        rng.random.return_value = 0.4213
        assessment = RiskAssessor(rng=rng).assess(classifier.classify("a.txt", 1, ""))
        assert assessment.risk_score == pytest.approx(42.13)

    def test_seeded_assessors_agree(self, classifier: ContentClassifier) -> None:
        content = classifier.classify("invoice.pdf", 1, "")
        first = RiskAssessor(rng=random.Random(5)).assess(content)
        second = RiskAssessor(rng=random.Random(5)).assess(content)
        assert first == second


class TestSummaryAndFactors:
    def test_summary_for_resume(self, classifier: ContentClassifier) -> None:
        content = classifier.classify("resume.pdf", 1, "")
        summary = RiskAssessor(rng=random.Random(0)).assess(content).summary
        assert summary == (
            "This Resume/CV has been analyzed for potential fraud indicators. "
            "The document contains 4 key sections with structured information "
            "including name, email, phone."
        )

    def test_summary_for_invoice(self, classifier: ContentClassifier) -> None:
        content = classifier.classify("invoice.pdf", 1, "")
        summary = RiskAssessor(rng=random.Random(0)).assess(content).summary
        assert "This Invoice has been analyzed" in summary
        assert "contains 3 key sections" in summary
        assert summary.endswith("including invoiceNumber, date, dueDate.")

    def test_factors_fixed_for_every_document(self, classifier: ContentClassifier) -> None:
        assessor = RiskAssessor(rng=random.Random(0))
        factors = {
            assessor.assess(classifier.classify(name, 1, "")).risk_factors
            for name in ("resume.pdf", "invoice.pdf", "contract.pdf", "report.pdf", "x.bin")
        }
        assert factors == {
            (
                "Document metadata consistency verified",
                "Content structure analysis completed",
                "Digital signature validation performed",
                "Text pattern recognition applied",
            )
        }


class TestRiskBands:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (0.0, LOW_RISK),
            (29.999, LOW_RISK),
            (30.0, MEDIUM_RISK),
            (69.999, MEDIUM_RISK),
            (70.0, HIGH_RISK),
            (99.99, HIGH_RISK),
        ],
    )
    def test_thresholds(self, score: float, expected: str) -> None:
        assert risk_label(score) == expected

    def test_label_strings(self) -> None:
        assert (LOW_RISK, MEDIUM_RISK, HIGH_RISK) == ("Low Risk", "Medium Risk", "High Risk")
