"""Document record normalizer — raw extraction record → PartialProfile.

The extraction collaborator returns one loosely-shaped mapping per document
(snake_case or camelCase keys, numbers as strings with currency symbols,
occasionally garbage).  This module resolves the document type and copies
every field into its typed group, treating malformed values as absent.

Only a record whose *shape* is wrong fails: a non-mapping record raises
``TypeError``; a present-but-non-mapping ``loan_data``, field group,
``risk_flags`` or ``metadata`` raises ``ValueError``.
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable

from app.pipeline.classifier import classify_document
from app.pipeline.models import (
    Assets,
    BorrowerInfo,
    CreditInfo,
    Debts,
    Employment,
    ExtractionMetadata,
    Income,
    LoanDetails,
    PartialProfile,
)
from app.pipeline.utils import clamp_confidence, clean_text, parse_amount, parse_credit_score

logger = logging.getLogger(__name__)


# group attribute → (group class, {field: parser})
_GROUP_PARSERS: dict[str, tuple[type, dict[str, Callable[[Any], Any]]]] = {
    "borrower_info": (BorrowerInfo, {
        "primary_name": clean_text,
        "co_borrower_name": clean_text,
        "ssn_last4": clean_text,
        "date_of_birth": clean_text,
    }),
    "employment": (Employment, {
        "employer_name": clean_text,
        "job_title": clean_text,
        "employment_length": clean_text,
    }),
    "income": (Income, {
        "base_monthly_income": parse_amount,
        "total_monthly_income": parse_amount,
        "annual_income": parse_amount,
        "other_monthly_income": parse_amount,
    }),
    "assets": (Assets, {
        "total_liquid_assets": parse_amount,
        "checking_balance": parse_amount,
        "savings_balance": parse_amount,
    }),
    "debts": (Debts, {
        "total_monthly_debts": parse_amount,
    }),
    "credit_info": (CreditInfo, {
        "credit_score": parse_credit_score,
    }),
    "loan_details": (LoanDetails, {
        "loan_amount": parse_amount,
        "loan_purpose": clean_text,
        "property_value": parse_amount,
    }),
}

# camelCase spellings used by the upload front-end
_GROUP_ALIASES = {
    "borrowerInfo": "borrower_info",
    "creditInfo": "credit_info",
    "loanDetails": "loan_details",
}


def _first(record: Mapping, *keys: str) -> Any:
    for k in keys:
        if k in record and record[k] is not None:
            return record[k]
    return None


def _parse_group(label: str, group_name: str, raw: Any):
    cls, parsers = _GROUP_PARSERS[group_name]
    if raw is None:
        return cls()
    if not isinstance(raw, Mapping):
        raise ValueError(f"[{label}] '{group_name}' must be a mapping, got {type(raw).__name__}")

    values = {}
    for field_name, parser in parsers.items():
        raw_value = raw.get(field_name)
        if raw_value is None:
            continue
        parsed = parser(raw_value)
        if parsed is None:
            logger.debug(f"[{label}] Discarded malformed {group_name}.{field_name}: {raw_value!r}")
            continue
        values[field_name] = parsed
    return cls(**values)


def _parse_risk_flags(label: str, raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"[{label}] 'risk_flags' must be a list, got {type(raw).__name__}")
    flags = []
    for item in raw:
        flag = clean_text(item)
        if flag:
            flags.append(flag)
    return flags


def _parse_metadata(label: str, record: Mapping) -> ExtractionMetadata:
    raw = _first(record, "metadata", "extractedText", "extraction")
    if raw is None:
        raw = {}
    if isinstance(raw, str):
        # extractedText is sometimes the OCR text itself, not a metadata block
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"[{label}] 'metadata' must be a mapping, got {type(raw).__name__}")

    confidence = clamp_confidence(raw.get("confidence"))
    processing_time = parse_amount(
        _first(raw, "processing_time_ms", "processing_time", "processingTime")
    )
    return ExtractionMetadata(confidence=confidence, processing_time_ms=processing_time)


def _extracted_text(record: Mapping) -> str:
    text = _first(record, "extracted_text", "text")
    if text is None and isinstance(record.get("extractedText"), str):
        text = record["extractedText"]
    return text if isinstance(text, str) else ""


def normalize_document(record: Mapping, index: int = 0) -> PartialProfile:
    """Convert one raw extraction record into a :class:`PartialProfile`.

    Args:
        record: Mapping from the extraction collaborator.
        index: Position in the submission sequence (used for log labels and
            as the fallback file label).

    Raises:
        TypeError: *record* is not a mapping.
        ValueError: ``loan_data``, a field group or ``metadata`` is present
            but is not a mapping, or ``risk_flags`` is neither a list nor a
            string.
    """
    if not isinstance(record, Mapping):
        raise TypeError(
            f"Document record #{index} must be a mapping, got {type(record).__name__}"
        )

    file_name = clean_text(_first(record, "file_name", "fileName", "filename")) or ""
    label = file_name or f"document[{index}]"

    document_type = classify_document(
        file_name=file_name,
        declared_type=_first(record, "document_type", "documentType"),
        extracted_text=_extracted_text(record),
    )

    loan_data = _first(record, "loan_data", "loanData")
    if loan_data is None:
        loan_data = {}
    if not isinstance(loan_data, Mapping):
        raise ValueError(f"[{label}] 'loan_data' must be a mapping, got {type(loan_data).__name__}")

    groups = {}
    for group_name in _GROUP_PARSERS:
        raw_group = loan_data.get(group_name)
        if raw_group is None:
            for alias, target in _GROUP_ALIASES.items():
                if target == group_name and alias in loan_data:
                    raw_group = loan_data[alias]
                    break
        groups[group_name] = _parse_group(label, group_name, raw_group)

    profile = PartialProfile(
        document_type=document_type,
        file_name=file_name,
        risk_flags=_parse_risk_flags(label, _first(loan_data, "risk_flags", "riskFlags")),
        metadata=_parse_metadata(label, record),
        **groups,
    )
    logger.debug(
        f"[{label}] Normalized as {document_type}: groups={profile.populated_groups()}"
    )
    return profile


def normalize_documents(records: list) -> list[PartialProfile]:
    """Normalize a whole submission, preserving order exactly."""
    return [normalize_document(r, i) for i, r in enumerate(records)]
