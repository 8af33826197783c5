"""Document classifier - resolves the loan document type of an upload.

Deterministic only.  A document type returned by the extraction pipeline
(or declared by the uploader) is honoured when it names a known type.
Otherwise the type is inferred from keyword substrings, filename first and
then extracted text, using a fixed priority order.  First matching rule
wins; anything unresolvable is ``other``.
"""

import logging
from typing import Any

from app.config import DOCUMENT_TYPES, DOCUMENT_TYPE_ALIASES

logger = logging.getLogger(__name__)


# ── Keyword pre-classifier ────────────────────────────────────────
# Ordered: earlier entries win when several would match.
# (doc_type, filename_keys, text_only_keys)
_KEYWORD_RULES: list[tuple[str, tuple[str, ...], tuple[str, ...]]] = [
    ("pay_stub", ("paystub", "pay_stub", "pay period"), ()),
    ("bank_statement", ("bank", "statement", "account balance"), ()),
    ("tax_return", ("tax", "1040"), ()),
    ("credit_report", ("credit", "fico"), ("credit score",)),
    ("employment_verification", ("employment",), ("employment verification",)),
]


def normalize_document_type(value: Any) -> str | None:
    """Map a declared type (any casing / alias) onto a known document type.

    Returns ``None`` when the value does not name a known type, so the caller
    can fall back to inference.
    """
    if not isinstance(value, str):
        return None
    key = value.strip().lower().replace(" ", "_")
    if not key:
        return None
    if key in DOCUMENT_TYPES:
        return key
    return DOCUMENT_TYPE_ALIASES.get(key)


def _match_keywords(haystack: str, include_text_keys: bool) -> str | None:
    for doc_type, keys, text_keys in _KEYWORD_RULES:
        candidates = keys + text_keys if include_text_keys else keys
        if any(k in haystack for k in candidates):
            return doc_type
    return None


def infer_document_type(file_name: str = "", extracted_text: str = "") -> str:
    """Infer a document type from filename, then from extracted text."""
    name_lower = (file_name or "").lower()
    if name_lower:
        hit = _match_keywords(name_lower, include_text_keys=False)
        if hit:
            return hit

    text_lower = (extracted_text or "").lower() if isinstance(extracted_text, str) else ""
    if text_lower:
        hit = _match_keywords(text_lower, include_text_keys=True)
        if hit:
            return hit

    return "other"


def classify_document(
    file_name: str = "",
    declared_type: Any = None,
    extracted_text: str = "",
) -> str:
    """Resolve the document type for one upload.  Never raises.

    Args:
        file_name: Original filename of the upload.
        declared_type: Type returned by the extraction pipeline or chosen by
            the uploader; honoured when it is a known type or alias.
        extracted_text: Optional OCR text searched after the filename.

    Returns:
        One of ``DOCUMENT_TYPES``.
    """
    declared = normalize_document_type(declared_type)
    if declared:
        return declared

    if declared_type not in (None, ""):
        logger.warning(
            f"[{file_name or 'document'}] Unknown declared type {declared_type!r} — inferring"
        )

    inferred = infer_document_type(file_name, extracted_text)
    logger.debug(f"[{file_name or 'document'}] Inferred document type: {inferred}")
    return inferred
