"""Risk scorer — evaluates the rule registry against a CombinedProfile.

Starts from a base score of 100, subtracts the points of every triggered
rule in registry order, then clamps the result into [0, 100].  The full
ordered list of triggered rules is returned as RiskFactors so every point
of the score is explainable.
"""

import logging

from app.config import TRACE_ENABLED
from app.pipeline.models import CombinedProfile, RiskAssessment, RiskFactor
from app.pipeline.risk_rules import (
    BASE_SCORE,
    RISK_RULES,
    RiskRule,
    approval_likelihood_for,
    build_context,
    risk_level_for,
)

logger = logging.getLogger(__name__)


def _trace(msg: str):
    """Emit a trace-level debug message when LENDING_TRACE is enabled."""
    if TRACE_ENABLED:
        logger.debug(f"[TRACE] {msg}")


def clamp_score(raw: int) -> int:
    return max(0, min(100, raw))


def score_profile(
    profile: CombinedProfile, rules: list[RiskRule] | None = None
) -> RiskAssessment:
    """Score a combined borrower profile.

    Args:
        profile: Output of :func:`app.pipeline.merger.merge_profiles`.
        rules: Rule list to evaluate; defaults to the policy registry.

    Returns:
        RiskAssessment with the clamped score, tier, ordered factors,
        approval likelihood and the computed DTI (``None`` if not computable).
    """
    rules = RISK_RULES if rules is None else rules
    ctx = build_context(profile)
    _trace(
        f"CONTEXT dti={ctx.dti_ratio} base={ctx.base_monthly_income} "
        f"annualized={ctx.annualized_monthly_income} assets={ctx.liquid_assets} "
        f"tenure={ctx.employment_length!r} credit={ctx.credit_score}"
    )

    factors: list[RiskFactor] = []
    for rule in rules:
        if not rule.applies(ctx):
            continue
        factor = RiskFactor(
            rule_code=rule.rule_code,
            category=rule.category,
            description=rule.describe(ctx),
            impact=rule.impact,
            points_deducted=rule.points,
        )
        factors.append(factor)
        _trace(f"RULE {rule.rule_code} -{rule.points}: {factor.description}")

    total_deduction = sum(f.points_deducted for f in factors)
    score = clamp_score(BASE_SCORE - total_deduction)
    level = risk_level_for(score)

    assessment = RiskAssessment(
        overall_risk_score=score,
        risk_level=level,
        risk_factors=factors,
        approval_likelihood=approval_likelihood_for(score),
        dti_ratio=ctx.dti_ratio,
        total_deduction=total_deduction,
    )
    logger.info(f"Risk scorer: {len(factors)} factor(s), score {score} ({level})")
    return assessment
