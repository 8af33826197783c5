"""Pipeline orchestrator - coordinates one loan application analysis.

Synchronous, stateless, order-preserving:
  Stage 1 → Normalize each raw extraction record into a PartialProfile
  Stage 2 → Merge PartialProfiles into one CombinedProfile
  Stage 3 → Risk scoring (rule registry) over the CombinedProfile
  Stage 4 → Consistency validation over the PartialProfile sequence
  Stage 5 → Decision from the risk score alone
  Stage 6 → Bundle everything with processing stats into an AnalysisResult

OCR, field extraction and persistence happen outside this module; the
caller hands in the already-collected extraction records.
"""

import logging
import time
from datetime import datetime, timezone

from app.pipeline.consistency import validate_consistency
from app.pipeline.decision import decide
from app.pipeline.merger import merge_profiles
from app.pipeline.models import AnalysisResult, PartialProfile, ProcessingStats
from app.pipeline.normalizer import normalize_documents
from app.pipeline.scoring import score_profile

logger = logging.getLogger(__name__)


def build_processing_stats(profiles: list[PartialProfile]) -> ProcessingStats:
    """Document count, mean extraction confidence and total extraction time.

    Documents without a reported confidence count as 0 toward the mean.
    """
    count = len(profiles)
    total_conf = sum(p.metadata.confidence or 0.0 for p in profiles)
    total_time = sum(p.metadata.processing_time_ms or 0.0 for p in profiles)
    return ProcessingStats(
        document_count=count,
        average_confidence=round(total_conf / count, 2) if count else 0.0,
        total_processing_time_ms=total_time,
        completed_at=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )


def analyze_profiles(profiles: list[PartialProfile]) -> AnalysisResult:
    """Run merge → score → validate → decide over normalized profiles."""
    combined = merge_profiles(profiles)
    assessment = score_profile(combined)
    consistency = validate_consistency(profiles, combined=combined)
    decision = decide(assessment.overall_risk_score)

    return AnalysisResult(
        decision=decision,
        combined_profile=combined,
        risk_assessment=assessment,
        consistency=consistency,
        processing_stats=build_processing_stats(profiles),
        documents=tuple(profiles),
    )


def analyze(documents: list) -> AnalysisResult:
    """Analyze one loan application from its per-document extraction records.

    Args:
        documents: Ordered sequence of raw extraction records (mappings).
            Order is significant: later documents win merge collisions.

    Returns:
        AnalysisResult.  Missing or malformed field values never raise; they
        show up as absent data in the report.

    Raises:
        TypeError / ValueError: a record (or one of its groups) has the wrong
            shape entirely.  Raised by the normalizer before any scoring.
    """
    started = time.perf_counter()
    documents = list(documents)

    profiles = normalize_documents(documents)
    result = analyze_profiles(profiles)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"Analysis complete: {len(profiles)} document(s), "
        f"risk {result.risk_assessment.overall_risk_score}/100 "
        f"({result.risk_assessment.risk_level}), consistency "
        f"{result.consistency.consistency_score}, decision {result.decision} "
        f"in {elapsed_ms:.1f}ms"
    )
    return result
