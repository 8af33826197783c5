"""Shared fixtures for the loan analysis test suite."""

import pytest


# ═══════════════════════════════════════════════════
# Extraction-record fixtures (dicts shaped like real collaborator output)
# ═══════════════════════════════════════════════════

@pytest.fixture
def pay_stub_record():
    """Pay stub for a borrower with 5 years of tenure."""
    return {
        "document_type": "pay_stub",
        "file_name": "paystub_march.pdf",
        "loan_data": {
            "borrower_info": {"primary_name": "Michael Martinez"},
            "employment": {
                "employer_name": "Acme Logistics",
                "employment_length": "5 years",
            },
            "income": {
                "base_monthly_income": 8500,
                "total_monthly_income": 8500,
            },
            "debts": {"total_monthly_debts": 2380},
        },
        "metadata": {"confidence": 96, "processing_time": 1200},
    }


@pytest.fixture
def bank_statement_record():
    """Bank statement with healthy reserves."""
    return {
        "document_type": "bank_statement",
        "file_name": "bank_statement_q1.pdf",
        "loan_data": {
            "assets": {"total_liquid_assets": 110000},
        },
        "metadata": {"confidence": 92, "processing_time": 900},
    }


@pytest.fixture
def tax_return_record():
    """Tax return whose annual income agrees with the pay stub."""
    return {
        "document_type": "tax_return",
        "file_name": "1040_2023.pdf",
        "loan_data": {
            "borrower_info": {"primary_name": "Michael Martinez"},
            "income": {"annual_income": 102000},
        },
        "metadata": {"confidence": 94, "processing_time": 1500},
    }


@pytest.fixture
def clean_application(pay_stub_record, bank_statement_record, tax_return_record):
    """All three required documents, consistent data."""
    return [pay_stub_record, bank_statement_record, tax_return_record]
