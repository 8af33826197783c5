"""Loan analysis endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from app.config import (
    DATA_QUALITY_BANDS,
    DATA_QUALITY_FLOOR,
    DOCUMENT_TYPES,
    MAX_DOCUMENTS_PER_ANALYSIS,
    REQUIRED_DOCUMENT_TYPES,
    RISK_LEVELS,
)
from app.pipeline.classifier import classify_document
from app.pipeline.consistency import MISSING_DOCUMENT_PENALTY, NAME_MISMATCH_PENALTY
from app.pipeline.decision import DECISION_THRESHOLDS, DECLINED
from app.pipeline.orchestrator import analyze
from app.pipeline.risk_rules import APPROVAL_LIKELIHOOD, BASE_SCORE, RISK_RULES

router = APIRouter()
logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    documents: list[Any] = Field(default_factory=list)


class ClassifyRequest(BaseModel):
    file_name: str = ""
    document_type: str | None = None
    extracted_text: str | None = None


@router.post("")
def analyze_application(request: AnalyzeRequest):
    """Analyze the extraction records of one loan application.

    Records are processed in the order given.  Returns the full
    AnalysisResult (combined profile, risk assessment, consistency report,
    decision, processing stats and the normalized documents).
    """
    if len(request.documents) > MAX_DOCUMENTS_PER_ANALYSIS:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {MAX_DOCUMENTS_PER_ANALYSIS} documents per analysis",
        )

    try:
        result = analyze(request.documents)
    except (TypeError, ValueError) as e:
        logger.warning(f"Rejected malformed analysis request: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    return result.to_dict()


@router.post("/classify")
def classify(request: ClassifyRequest):
    """Resolve the document type for a filename / declared type / text."""
    doc_type = classify_document(
        file_name=request.file_name,
        declared_type=request.document_type,
        extracted_text=request.extracted_text or "",
    )
    return {"file_name": request.file_name, "document_type": doc_type}


@router.get("/policy")
def get_policy():
    """Expose the fixed underwriting policy tables for audit."""
    return {
        "base_score": BASE_SCORE,
        "rules": [r.to_dict() for r in RISK_RULES],
        "risk_levels": [{"min_score": t, "risk_level": lvl} for t, lvl in RISK_LEVELS],
        "approval_likelihood": [
            {"min_score": t, "likelihood": pct} for t, pct in APPROVAL_LIKELIHOOD
        ],
        "decisions": [
            {"min_score": t, "decision": d} for t, d in DECISION_THRESHOLDS
        ] + [{"min_score": 0, "decision": DECLINED}],
        "document_types": DOCUMENT_TYPES,
        "required_document_types": REQUIRED_DOCUMENT_TYPES,
        "consistency_penalties": {
            "missing_required_document": MISSING_DOCUMENT_PENALTY,
            "name_inconsistency": NAME_MISMATCH_PENALTY,
        },
        "data_quality": [
            {"min_score": t, "label": lbl} for t, lbl in DATA_QUALITY_BANDS
        ] + [{"min_score": None, "label": DATA_QUALITY_FLOOR}],
    }
