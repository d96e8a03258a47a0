LOW_RISK = "Low Risk"
MEDIUM_RISK = "Medium Risk"
HIGH_RISK = "High Risk"

LOW_RISK_CEILING = 30.0
HIGH_RISK_FLOOR = 70.0


def risk_label(score: float) -> str:
    """Band a risk score: < 30 low, [30, 70) medium, >= 70 high."""
    if score < LOW_RISK_CEILING:
        return LOW_RISK
    if score < HIGH_RISK_FLOOR:
        return MEDIUM_RISK
    return HIGH_RISK
