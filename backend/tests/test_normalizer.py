"""Tests for backend/app/pipeline/normalizer.py — raw record → PartialProfile."""

import pytest

from app.pipeline.normalizer import normalize_document, normalize_documents


# ═══════════════════════════════════════════════════
# 1. Field mapping
# ═══════════════════════════════════════════════════

class TestFieldMapping:

    def test_snake_case_record(self, pay_stub_record):
        p = normalize_document(pay_stub_record)
        assert p.document_type == "pay_stub"
        assert p.file_name == "paystub_march.pdf"
        assert p.borrower_info.primary_name == "Michael Martinez"
        assert p.employment.employment_length == "5 years"
        assert p.income.total_monthly_income == 8500.0
        assert p.debts.total_monthly_debts == 2380.0
        assert p.metadata.confidence == 96.0
        assert p.metadata.processing_time_ms == 1200.0

    def test_camel_case_record(self):
        p = normalize_document({
            "documentType": "bank_statement",
            "fileName": "chase.pdf",
            "loanData": {
                "borrowerInfo": {"primary_name": "Ana Ruiz"},
                "assets": {"total_liquid_assets": "$45,000"},
                "creditInfo": {"credit_score": "701"},
                "riskFlags": ["Large deposit 03/02"],
            },
            "extractedText": {"confidence": 0.9, "processingTime": 800},
        })
        assert p.document_type == "bank_statement"
        assert p.file_name == "chase.pdf"
        assert p.borrower_info.primary_name == "Ana Ruiz"
        assert p.assets.total_liquid_assets == 45000.0
        assert p.credit_info.credit_score == 701.0
        assert p.risk_flags == ["Large deposit 03/02"]
        assert p.metadata.confidence == pytest.approx(90.0)
        assert p.metadata.processing_time_ms == 800.0

    def test_type_inferred_from_filename(self):
        p = normalize_document({"file_name": "1040_2022.pdf"})
        assert p.document_type == "tax_return"

    def test_type_inferred_from_text(self):
        p = normalize_document({"file_name": "scan.jpg", "extracted_text": "Account Balance: $3,100"})
        assert p.document_type == "bank_statement"

    def test_loan_details(self):
        p = normalize_document({
            "loan_data": {"loan_details": {
                "loan_amount": "350k", "loan_purpose": "purchase", "property_value": 450000,
            }},
        })
        assert p.loan_details.loan_amount == 350000.0
        assert p.loan_details.loan_purpose == "purchase"
        assert p.loan_details.property_value == 450000.0

    def test_single_string_risk_flag(self):
        p = normalize_document({"loan_data": {"risk_flags": "NSF fee"}})
        assert p.risk_flags == ["NSF fee"]


# ═══════════════════════════════════════════════════
# 2. Malformed values are absent, not errors
# ═══════════════════════════════════════════════════

class TestMalformedValues:

    @pytest.mark.parametrize("bad", ["N/A", "", None, float("nan"), -2500, True, [1]])
    def test_bad_income_is_absent(self, bad):
        p = normalize_document({"loan_data": {"income": {"total_monthly_income": bad}}})
        assert p.income.total_monthly_income is None

    def test_zero_credit_score_absent(self):
        p = normalize_document({"loan_data": {"credit_info": {"credit_score": 0}}})
        assert p.credit_info.credit_score is None

    def test_unknown_fields_dropped(self):
        p = normalize_document({"loan_data": {"income": {"bonus": 500, "annual_income": 60000}}})
        assert p.income.annual_income == 60000.0
        assert "bonus" not in p.to_dict()["income"]

    def test_empty_record(self):
        p = normalize_document({})
        assert p.document_type == "other"
        assert p.populated_groups() == []
        assert p.metadata.confidence is None

    def test_text_in_extracted_text_key_is_not_metadata(self):
        p = normalize_document({"extractedText": "GROSS PAY PAY PERIOD"})
        assert p.metadata.confidence is None
        assert p.document_type == "pay_stub"


# ═══════════════════════════════════════════════════
# 3. Wrong shapes fail fast
# ═══════════════════════════════════════════════════

class TestWrongShapes:

    @pytest.mark.parametrize("record", ["paystub.pdf", 42, None, ["a"]])
    def test_non_mapping_record(self, record):
        with pytest.raises(TypeError):
            normalize_document(record)

    def test_non_mapping_loan_data(self):
        with pytest.raises(ValueError, match="loan_data"):
            normalize_document({"file_name": "x.pdf", "loan_data": "income 5000"})

    def test_non_mapping_group(self):
        with pytest.raises(ValueError, match="income"):
            normalize_document({"loan_data": {"income": 8500}})

    def test_non_mapping_metadata(self):
        with pytest.raises(ValueError, match="metadata"):
            normalize_document({"metadata": [96]})

    @pytest.mark.parametrize("flags", [{"nsf": True}, 3, 2.5])
    def test_non_list_risk_flags(self, flags):
        with pytest.raises(ValueError, match="risk_flags"):
            normalize_document({"loan_data": {"risk_flags": flags}})


# ═══════════════════════════════════════════════════
# 4. Sequences
# ═══════════════════════════════════════════════════

class TestSequence:

    def test_order_preserved(self, clean_application):
        profiles = normalize_documents(clean_application)
        assert [p.document_type for p in profiles] == ["pay_stub", "bank_statement", "tax_return"]

    def test_duplicates_kept(self, pay_stub_record):
        profiles = normalize_documents([pay_stub_record, pay_stub_record])
        assert len(profiles) == 2

    def test_error_names_position(self):
        with pytest.raises(TypeError, match="#1"):
            normalize_documents([{}, "oops"])
