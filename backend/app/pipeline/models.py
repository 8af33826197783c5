"""Typed profile and report shapes for the loan analysis pipeline.

Every per-document fact set is a :class:`PartialProfile`; the merger folds an
ordered sequence of them into one :class:`CombinedProfile`.  The scorer and
validator then produce a :class:`RiskAssessment` and a
:class:`ConsistencyReport`, and the orchestrator bundles everything into an
immutable :class:`AnalysisResult`.

Field groups are plain dataclasses so that every lookup is an attribute
access checked at definition time rather than a dotted-path string lookup.
All numeric fields are either a finite non-negative float or ``None``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any


# ═══════════════════════════════════════════════════
# FIELD GROUPS
# ═══════════════════════════════════════════════════

@dataclass
class BorrowerInfo:
    primary_name: str | None = None
    co_borrower_name: str | None = None
    ssn_last4: str | None = None
    date_of_birth: str | None = None


@dataclass
class Employment:
    employer_name: str | None = None
    job_title: str | None = None
    employment_length: str | None = None   # free text, e.g. "5 years", "8 months"


@dataclass
class Income:
    base_monthly_income: float | None = None
    total_monthly_income: float | None = None
    annual_income: float | None = None
    other_monthly_income: float | None = None


@dataclass
class Assets:
    total_liquid_assets: float | None = None
    checking_balance: float | None = None
    savings_balance: float | None = None


@dataclass
class Debts:
    total_monthly_debts: float | None = None


@dataclass
class CreditInfo:
    credit_score: float | None = None


@dataclass
class LoanDetails:
    loan_amount: float | None = None
    loan_purpose: str | None = None
    property_value: float | None = None


# Group attribute name → group class, in merge order
PROFILE_GROUPS: dict[str, type] = {
    "borrower_info": BorrowerInfo,
    "employment": Employment,
    "income": Income,
    "assets": Assets,
    "debts": Debts,
    "credit_info": CreditInfo,
    "loan_details": LoanDetails,
}

# Fields counted by the data-completeness score
COMPLETENESS_FIELDS: list[tuple[str, str]] = [
    ("borrower_info", "primary_name"),
    ("employment", "employer_name"),
    ("income", "total_monthly_income"),
    ("assets", "total_liquid_assets"),
    ("debts", "total_monthly_debts"),
]


def group_values(group: Any) -> dict[str, Any]:
    """Return only the populated fields of a field group."""
    return {k: v for k, v in asdict(group).items() if v is not None}


def group_is_empty(group: Any) -> bool:
    return all(getattr(group, f.name) is None for f in fields(group))


def _completeness(profile: Any) -> float:
    present = sum(
        1 for group_name, field_name in COMPLETENESS_FIELDS
        if getattr(getattr(profile, group_name), field_name) is not None
    )
    return round(present / len(COMPLETENESS_FIELDS) * 100, 1)


@dataclass
class ExtractionMetadata:
    """What the OCR / field-extraction collaborator reported for one document."""
    confidence: float | None = None          # 0–100
    processing_time_ms: float | None = None


# ═══════════════════════════════════════════════════
# PROFILES
# ═══════════════════════════════════════════════════

@dataclass
class PartialProfile:
    """Typed fact set extracted from one single document."""
    document_type: str = "other"
    file_name: str = ""
    borrower_info: BorrowerInfo = field(default_factory=BorrowerInfo)
    employment: Employment = field(default_factory=Employment)
    income: Income = field(default_factory=Income)
    assets: Assets = field(default_factory=Assets)
    debts: Debts = field(default_factory=Debts)
    credit_info: CreditInfo = field(default_factory=CreditInfo)
    loan_details: LoanDetails = field(default_factory=LoanDetails)
    risk_flags: list[str] = field(default_factory=list)
    metadata: ExtractionMetadata = field(default_factory=ExtractionMetadata)

    def populated_groups(self) -> list[str]:
        return [name for name in PROFILE_GROUPS if not group_is_empty(getattr(self, name))]

    def completeness(self) -> float:
        """Percentage of the key underwriting fields present in this document."""
        return _completeness(self)

    def to_dict(self) -> dict:
        out: dict[str, Any] = {
            "document_type": self.document_type,
            "file_name": self.file_name,
        }
        for name in PROFILE_GROUPS:
            out[name] = group_values(getattr(self, name))
        out["risk_flags"] = list(self.risk_flags)
        out["metadata"] = asdict(self.metadata)
        return out


@dataclass
class CombinedProfile:
    """Merged fact set for one loan application across all documents.

    ``document_types`` keeps the submission-ordered type of every contributing
    document (used for the required-document checklist) and
    ``field_sources`` records which document supplied each winning value.
    """
    borrower_info: BorrowerInfo = field(default_factory=BorrowerInfo)
    employment: Employment = field(default_factory=Employment)
    income: Income = field(default_factory=Income)
    assets: Assets = field(default_factory=Assets)
    debts: Debts = field(default_factory=Debts)
    credit_info: CreditInfo = field(default_factory=CreditInfo)
    loan_details: LoanDetails = field(default_factory=LoanDetails)
    risk_flags: list[str] = field(default_factory=list)
    document_types: list[str] = field(default_factory=list)
    field_sources: dict[str, str] = field(default_factory=dict)

    @property
    def documents_analyzed(self) -> int:
        return len(self.document_types)

    def populated_groups(self) -> list[str]:
        return [name for name in PROFILE_GROUPS if not group_is_empty(getattr(self, name))]

    def completeness(self) -> float:
        return _completeness(self)

    def as_partial(self, document_type: str = "other", file_name: str = "combined") -> PartialProfile:
        """Re-wrap the merged values as a single PartialProfile.

        Merging ``[profile.as_partial()]`` reproduces the same field groups.
        """
        groups = {
            name: cls(**asdict(getattr(self, name)))
            for name, cls in PROFILE_GROUPS.items()
        }
        return PartialProfile(
            document_type=document_type,
            file_name=file_name,
            risk_flags=list(self.risk_flags),
            **groups,
        )

    def to_dict(self) -> dict:
        out: dict[str, Any] = {
            name: group_values(getattr(self, name)) for name in PROFILE_GROUPS
        }
        out["risk_flags"] = list(self.risk_flags)
        out["documents_analyzed"] = self.documents_analyzed
        out["document_types"] = list(self.document_types)
        out["field_sources"] = dict(self.field_sources)
        return out


# ═══════════════════════════════════════════════════
# REPORTS
# ═══════════════════════════════════════════════════

@dataclass
class RiskFactor:
    """One triggered deduction rule."""
    rule_code: str
    category: str
    description: str
    impact: str               # low | medium | high
    points_deducted: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RiskAssessment:
    overall_risk_score: int
    risk_level: str
    risk_factors: list[RiskFactor] = field(default_factory=list)
    approval_likelihood: int = 0
    dti_ratio: float | None = None
    total_deduction: int = 0

    def to_dict(self) -> dict:
        return {
            "overall_risk_score": self.overall_risk_score,
            "risk_level": self.risk_level,
            "risk_factors": [f.to_dict() for f in self.risk_factors],
            "approval_likelihood": self.approval_likelihood,
            "dti_ratio": self.dti_ratio,
            "total_deduction": self.total_deduction,
        }


@dataclass
class ConsistencyReport:
    consistency_score: int = 100
    inconsistencies: list[str] = field(default_factory=list)
    missing_documents: list[str] = field(default_factory=list)
    data_quality: str = "excellent"
    data_completeness: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ProcessingStats:
    document_count: int
    average_confidence: float
    total_processing_time_ms: float
    completed_at: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything produced by one ``analyze()`` call.  Never mutated."""
    decision: str
    combined_profile: CombinedProfile
    risk_assessment: RiskAssessment
    consistency: ConsistencyReport
    processing_stats: ProcessingStats
    documents: tuple[PartialProfile, ...] = ()

    def to_dict(self) -> dict:
        return {
            "decision": self.decision,
            "combined_profile": self.combined_profile.to_dict(),
            "risk_assessment": self.risk_assessment.to_dict(),
            "consistency": self.consistency.to_dict(),
            "processing_stats": self.processing_stats.to_dict(),
            "documents": [d.to_dict() for d in self.documents],
        }
