"""Decision engine — maps the final risk score to an underwriting outcome.

Consumes the risk score only.  Consistency findings are reported next to
the decision but do not gate it.
"""

APPROVED = "APPROVED"
CONDITIONAL_APPROVAL = "CONDITIONAL_APPROVAL"
DECLINED = "DECLINED"

DECISION_THRESHOLDS = [
    (70, APPROVED),
    (50, CONDITIONAL_APPROVAL),
]


def decide(risk_score: int) -> str:
    for threshold, outcome in DECISION_THRESHOLDS:
        if risk_score >= threshold:
            return outcome
    return DECLINED
