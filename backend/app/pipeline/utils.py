"""Shared utility functions for the loan analysis pipeline.

Consolidates parsing logic used by the normalizer, validator and scorer:
  - Amount parsing (currency symbols, thousands separators, k/m suffixes)
  - Credit-score and confidence coercion
  - Text cleanup
"""

import math
import re
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════
# 1. NUMERIC PARSING
# ═══════════════════════════════════════════════════

_CURRENCY_TOKENS = ("USD", "US$", "$")
_SUFFIX_RE = re.compile(r'^(?P<num>[-+]?\d*\.?\d+)\s*(?P<suffix>k|m|mm|thousand|million)?$', re.IGNORECASE)
_SUFFIX_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "mm": 1_000_000,
    "million": 1_000_000,
}


def parse_amount(value: Any) -> Optional[float]:
    """Parse a monetary amount or other quantity from various formats.

    Handles:
      - Numeric types (int, float); ``bool`` is rejected
      - Strings with $, US$, USD prefixes
      - Comma-separated numbers
      - k / m / thousand / million suffixes ("102k" → 102000)

    Returns ``None`` for anything that is not a finite, non-negative number
    so callers can treat it as "not provided".
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            # int beyond float range, e.g. a run of digits from JSON
            return None
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        for token in _CURRENCY_TOKENS:
            s = s.replace(token, "")
        s = s.replace(",", "").replace("/mo", "").strip()
        match = _SUFFIX_RE.match(s)
        if not match:
            return None
        number = float(match.group("num"))
        suffix = (match.group("suffix") or "").lower()
        number *= _SUFFIX_MULTIPLIERS.get(suffix, 1)
    else:
        return None

    if not math.isfinite(number) or number < 0:
        return None
    return number


def parse_credit_score(value: Any) -> Optional[float]:
    """Parse a credit score; zero or unparseable values count as absent."""
    score = parse_amount(value)
    if score is None or score <= 0:
        return None
    return score


def clamp_confidence(value: Any) -> Optional[float]:
    """Coerce an extraction confidence into the 0–100 range.

    Values in (0, 1] are read as fractions (0.92 → 92.0).
    """
    conf = parse_amount(value)
    if conf is None:
        return None
    if 0 < conf <= 1:
        conf *= 100
    return min(100.0, conf)


# ═══════════════════════════════════════════════════
# 2. TEXT
# ═══════════════════════════════════════════════════

_WS_RE = re.compile(r'\s+')


def clean_text(value: Any) -> Optional[str]:
    """Return a stripped, whitespace-collapsed string or ``None`` if empty."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    s = _WS_RE.sub(" ", value).strip()
    return s or None


def contains_token(text: Any, token: str) -> bool:
    """Case-insensitive substring check that tolerates non-string input."""
    if not isinstance(text, str):
        return False
    return token.lower() in text.lower()
