"""Application configuration."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from backend root (before any os.getenv calls)
load_dotenv(BASE_DIR / ".env")

# HTTP layer
MAX_DOCUMENTS_PER_ANALYSIS = int(os.getenv("MAX_DOCUMENTS_PER_ANALYSIS", "20"))
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if o.strip()
]

# Debug trace mode: set LENDING_TRACE=1 to get detailed scoring/merge logs
TRACE_ENABLED = os.getenv("LENDING_TRACE", "").strip().lower() in ("1", "true", "yes")

# Document types
DOCUMENT_TYPES = [
    "pay_stub",
    "bank_statement",
    "tax_return",
    "credit_report",
    "employment_verification",
    "asset_statement",
    "other",
]

# Checklist order matters: missing types are reported in this order
REQUIRED_DOCUMENT_TYPES = ["pay_stub", "bank_statement", "tax_return"]

# Spellings emitted by upstream classifiers / upload forms
DOCUMENT_TYPE_ALIASES = {
    "paystub": "pay_stub",
    "pay-stub": "pay_stub",
    "bank": "bank_statement",
    "tax": "tax_return",
    "1040": "tax_return",
    "credit": "credit_report",
    "employment_letter": "employment_verification",
    "employment": "employment_verification",
    "voe": "employment_verification",
    "asset": "asset_statement",
}

# Risk tiers (highest threshold wins)
RISK_LEVELS = [
    (85, "EXCELLENT"),
    (70, "GOOD"),
    (60, "FAIR"),
    (50, "POOR"),
    (0, "HIGH_RISK"),
]

# Data-quality label from consistency score
DATA_QUALITY_BANDS = [
    (90, "excellent"),
    (80, "good"),
    (70, "fair"),
]
DATA_QUALITY_FLOOR = "poor"
