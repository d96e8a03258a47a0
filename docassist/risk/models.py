from dataclasses import dataclass


@dataclass(frozen=True)
class RiskAssessment:
    """Output of the risk assessor, attached to a document on completion."""

    risk_score: float  # in [0, 100)
    summary: str
    risk_factors: tuple[str, ...]
