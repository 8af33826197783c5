"""Tests for backend/app/pipeline/utils.py — amount, score and name parsing."""

import math

import pytest

from app.pipeline.utils import (
    clamp_confidence,
    clean_text,
    contains_token,
    parse_amount,
    parse_credit_score,
)


# ═══════════════════════════════════════════════════
# 1. parse_amount
# ═══════════════════════════════════════════════════

class TestParseAmount:

    @pytest.mark.parametrize("raw, expected", [
        (8500, 8500.0),
        (8500.5, 8500.5),
        ("8500", 8500.0),
        ("$8,500.00", 8500.0),
        ("USD 110,000", 110000.0),
        ("US$ 2,380", 2380.0),
        ("$4,200/mo", 4200.0),
        ("102k", 102000.0),
        ("1.5m", 1500000.0),
        ("2 million", 2000000.0),
        (0, 0.0),
    ])
    def test_accepted_formats(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [
        None, "", "   ", "N/A", "abc", "12abc", True, False,
        -5, "-100", float("nan"), float("inf"), [100], {"v": 1},
    ])
    def test_rejected_values_are_absent(self, raw):
        assert parse_amount(raw) is None

    def test_result_is_finite(self):
        assert math.isfinite(parse_amount("999,999,999"))

    def test_int_beyond_float_range_is_absent(self):
        assert parse_amount(10**400) is None

    def test_digit_string_beyond_float_range_is_absent(self):
        assert parse_amount("9" * 400) is None


# ═══════════════════════════════════════════════════
# 2. Credit score & confidence
# ═══════════════════════════════════════════════════

class TestCreditScore:

    def test_valid_score(self):
        assert parse_credit_score("720") == 720.0

    def test_zero_is_absent(self):
        assert parse_credit_score(0) is None

    def test_garbage_is_absent(self):
        assert parse_credit_score("excellent") is None


class TestClampConfidence:

    def test_percent_passthrough(self):
        assert clamp_confidence(92) == 92.0

    def test_fraction_scaled(self):
        assert clamp_confidence(0.92) == pytest.approx(92.0)

    def test_capped_at_100(self):
        assert clamp_confidence(140) == 100.0

    def test_missing(self):
        assert clamp_confidence(None) is None


# ═══════════════════════════════════════════════════
# 3. Text helpers
# ═══════════════════════════════════════════════════

class TestText:

    def test_clean_text_collapses_whitespace(self):
        assert clean_text("  Acme   Logistics \n") == "Acme Logistics"

    def test_clean_text_empty(self):
        assert clean_text("   ") is None
        assert clean_text(None) is None

    def test_clean_text_keeps_case_and_punctuation(self):
        assert clean_text("MARTINEZ,  Michael J.") == "MARTINEZ, Michael J."

    def test_contains_token(self):
        assert contains_token("8 Months", "month")
        assert not contains_token(None, "month")
