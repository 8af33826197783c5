"""Risk rule registry — single source of truth for the underwriting policy.

Each rule defines:
  - rule_code / category / impact: identity & classification
  - points: fixed deduction from the base score of 100
  - condition: human-readable statement of the trigger (for audit output)
  - applies: predicate over a :class:`ScoringContext`
  - describe: builds the RiskFactor description for a triggered rule

Rules are evaluated in list order and that order is preserved in the
resulting RiskFactor list.  Tiered policies (DTI, credit score) are split
into mutually exclusive rules so at most one tier of each fires.

Thresholds and point values are fixed policy constants, not per-call
configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from app.config import RISK_LEVELS
from app.pipeline.models import CombinedProfile
from app.pipeline.utils import contains_token

BASE_SCORE = 100

DTI_HIGH_THRESHOLD = 43.0         # percent
DTI_VERY_HIGH_THRESHOLD = 50.0    # percent
INCOME_MISMATCH_THRESHOLD = 0.15  # relative difference
MIN_LIQUID_ASSETS = 10_000
CREDIT_LOW_THRESHOLD = 620
CREDIT_FAIR_THRESHOLD = 680

# Approval likelihood (%) as a step function of the final score
APPROVAL_LIKELIHOOD = [
    (80, 95),
    (70, 80),
    (60, 60),
    (0, 30),
]


# ═══════════════════════════════════════════════════
# SCORING CONTEXT
# ═══════════════════════════════════════════════════

@dataclass(frozen=True)
class ScoringContext:
    """Derived figures the rules are evaluated against."""
    dti_ratio: float | None = None
    base_monthly_income: float | None = None
    annualized_monthly_income: float | None = None
    income_difference: float | None = None
    liquid_assets: float | None = None
    employment_length: str | None = None
    credit_score: float | None = None


def compute_dti(monthly_debts: float | None, monthly_income: float | None) -> float | None:
    """Debt-to-income ratio in percent, or ``None`` when not computable.

    Multiplies before dividing so whole-dollar inputs land exactly on the
    policy thresholds (4300 / 10000 → 43.0, not 42.99999…).
    """
    if monthly_debts is None or not monthly_income:
        return None
    return monthly_debts * 100 / monthly_income


def build_context(profile: CombinedProfile) -> ScoringContext:
    income = profile.income
    base = income.base_monthly_income
    annualized = income.annual_income / 12 if income.annual_income else None

    difference = None
    if base and annualized:
        difference = abs(base - annualized) / base

    return ScoringContext(
        dti_ratio=compute_dti(profile.debts.total_monthly_debts, income.total_monthly_income),
        base_monthly_income=base,
        annualized_monthly_income=annualized,
        income_difference=difference,
        liquid_assets=profile.assets.total_liquid_assets,
        employment_length=profile.employment.employment_length,
        credit_score=profile.credit_info.credit_score,
    )


# ═══════════════════════════════════════════════════
# RULE DEFINITIONS
# ═══════════════════════════════════════════════════

@dataclass(frozen=True)
class RiskRule:
    rule_code: str
    category: str
    impact: str
    points: int
    condition: str
    applies: Callable[[ScoringContext], bool]
    describe: Callable[[ScoringContext], str]

    def to_dict(self) -> dict:
        return {
            "rule_code": self.rule_code,
            "category": self.category,
            "impact": self.impact,
            "points": self.points,
            "condition": self.condition,
        }


def _short_tenure(ctx: ScoringContext) -> bool:
    length = ctx.employment_length
    return contains_token(length, "month") and not contains_token(length, "year")


RISK_RULES: list[RiskRule] = [
    RiskRule(
        rule_code="DTI_VERY_HIGH",
        category="Income",
        impact="high",
        points=40,
        condition=f"DTI > {DTI_VERY_HIGH_THRESHOLD:g}%",
        applies=lambda c: c.dti_ratio is not None and c.dti_ratio > DTI_VERY_HIGH_THRESHOLD,
        describe=lambda c: f"Very high DTI ratio: {c.dti_ratio:.1f}%",
    ),
    RiskRule(
        rule_code="DTI_HIGH",
        category="Income",
        impact="high",
        points=25,
        condition=f"{DTI_HIGH_THRESHOLD:g}% < DTI <= {DTI_VERY_HIGH_THRESHOLD:g}%",
        applies=lambda c: (
            c.dti_ratio is not None
            and DTI_HIGH_THRESHOLD < c.dti_ratio <= DTI_VERY_HIGH_THRESHOLD
        ),
        describe=lambda c: f"High DTI ratio: {c.dti_ratio:.1f}%",
    ),
    RiskRule(
        rule_code="INCOME_INCONSISTENCY",
        category="Income Verification",
        impact="high",
        points=20,
        condition=(
            f"|base monthly - annual/12| / base monthly > {INCOME_MISMATCH_THRESHOLD:.0%}"
        ),
        applies=lambda c: (
            c.income_difference is not None and c.income_difference > INCOME_MISMATCH_THRESHOLD
        ),
        describe=lambda c: (
            f"Income inconsistency between documents: {c.income_difference * 100:.1f}%"
        ),
    ),
    RiskRule(
        rule_code="LOW_LIQUID_ASSETS",
        category="Assets",
        impact="medium",
        points=15,
        condition=f"total liquid assets < {MIN_LIQUID_ASSETS:,}",
        applies=lambda c: c.liquid_assets is not None and c.liquid_assets < MIN_LIQUID_ASSETS,
        describe=lambda c: "Low liquid asset reserves",
    ),
    RiskRule(
        rule_code="SHORT_EMPLOYMENT",
        category="Employment",
        impact="medium",
        points=15,
        condition="employment length given in months with no years",
        applies=_short_tenure,
        describe=lambda c: f"Short employment history: {c.employment_length}",
    ),
    RiskRule(
        rule_code="CREDIT_LOW",
        category="Credit",
        impact="high",
        points=30,
        condition=f"credit score < {CREDIT_LOW_THRESHOLD}",
        applies=lambda c: c.credit_score is not None and c.credit_score < CREDIT_LOW_THRESHOLD,
        describe=lambda c: f"Low credit score: {c.credit_score:g}",
    ),
    RiskRule(
        rule_code="CREDIT_FAIR",
        category="Credit",
        impact="medium",
        points=15,
        condition=f"{CREDIT_LOW_THRESHOLD} <= credit score < {CREDIT_FAIR_THRESHOLD}",
        applies=lambda c: (
            c.credit_score is not None
            and CREDIT_LOW_THRESHOLD <= c.credit_score < CREDIT_FAIR_THRESHOLD
        ),
        describe=lambda c: f"Fair credit score: {c.credit_score:g}",
    ),
]

RULE_BY_CODE: dict[str, RiskRule] = {r.rule_code: r for r in RISK_RULES}


# ═══════════════════════════════════════════════════
# STEP TABLES
# ═══════════════════════════════════════════════════

def risk_level_for(score: int) -> str:
    for threshold, label in RISK_LEVELS:
        if score >= threshold:
            return label
    return RISK_LEVELS[-1][1]


def approval_likelihood_for(score: int) -> int:
    for threshold, likelihood in APPROVAL_LIKELIHOOD:
        if score >= threshold:
            return likelihood
    return APPROVAL_LIKELIHOOD[-1][1]
