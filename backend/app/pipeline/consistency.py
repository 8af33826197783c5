"""Consistency validator — completeness and cross-document agreement.

Produces a consistency score that is separate from the risk score:
  - starts at 100
  - −20 for every required document type that was never submitted
  - −15 once if the documents report more than one distinct borrower name

No floor is applied; the score is whatever the fixed penalties leave.
Data completeness (share of key underwriting fields present in the
combined profile) is reported alongside but never changes the score.
"""

import logging

from app.config import (
    DATA_QUALITY_BANDS,
    DATA_QUALITY_FLOOR,
    REQUIRED_DOCUMENT_TYPES,
    TRACE_ENABLED,
)
from app.pipeline.models import CombinedProfile, ConsistencyReport, PartialProfile
from app.pipeline.utils import clean_text

logger = logging.getLogger(__name__)

MISSING_DOCUMENT_PENALTY = 20
NAME_MISMATCH_PENALTY = 15
NAME_INCONSISTENCY = "Name inconsistency across documents"


def _trace(msg: str):
    """Emit a trace-level debug message when LENDING_TRACE is enabled."""
    if TRACE_ENABLED:
        logger.debug(f"[TRACE] {msg}")


def data_quality_for(score: int) -> str:
    for threshold, label in DATA_QUALITY_BANDS:
        if score >= threshold:
            return label
    return DATA_QUALITY_FLOOR


def find_missing_documents(
    profiles: list[PartialProfile], required_types: list[str] | None = None
) -> list[str]:
    """Required document types absent from the submission, in checklist order."""
    required = REQUIRED_DOCUMENT_TYPES if required_types is None else required_types
    observed = {p.document_type for p in profiles}
    return [t for t in required if t not in observed]


def distinct_borrower_names(profiles: list[PartialProfile]) -> list[str]:
    """Distinct primary borrower names in first-seen order.

    Names compare exactly after whitespace cleanup, so a casing or
    punctuation difference between documents counts as a second name.
    """
    names: list[str] = []
    for p in profiles:
        name = clean_text(p.borrower_info.primary_name)
        if name and name not in names:
            names.append(name)
    return names


def validate_consistency(
    profiles: list[PartialProfile],
    combined: CombinedProfile | None = None,
    required_types: list[str] | None = None,
) -> ConsistencyReport:
    """Cross-check the submitted documents.

    Args:
        profiles: PartialProfiles in submission order.
        combined: Merged profile, used only for the completeness figure.
        required_types: Override for the required-document checklist.
    """
    report = ConsistencyReport()

    # ── Required documents ──
    for doc_type in find_missing_documents(profiles, required_types):
        report.missing_documents.append(doc_type)
        report.consistency_score -= MISSING_DOCUMENT_PENALTY
        _trace(f"MISSING {doc_type} -{MISSING_DOCUMENT_PENALTY}")

    # ── Borrower name agreement ──
    names = distinct_borrower_names(profiles)
    if len(names) > 1:
        report.inconsistencies.append(NAME_INCONSISTENCY)
        report.consistency_score -= NAME_MISMATCH_PENALTY
        _trace(f"NAMES {names} -{NAME_MISMATCH_PENALTY}")

    report.data_quality = data_quality_for(report.consistency_score)
    if combined is not None:
        report.data_completeness = combined.completeness()

    logger.info(
        f"Consistency validator: score {report.consistency_score} ({report.data_quality}), "
        f"missing={report.missing_documents}, inconsistencies={len(report.inconsistencies)}"
    )
    return report
