#!/usr/bin/env python3
"""CLI tool to run the loan analysis engine on a JSON file of extraction records.

Usage:
    python run_analysis.py <records.json>            # Pretty-printed report
    python run_analysis.py <records.json> --trace    # Run with LENDING_TRACE
    python run_analysis.py <records.json> --json     # Output raw JSON

The input file holds either a list of extraction records or an object
with a ``documents`` list, in submission order.

Examples:
    python run_analysis.py samples/application_001.json
    python run_analysis.py samples/application_001.json --trace
"""

import argparse
import json
import os
import sys
from pathlib import Path

# Ensure the backend package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))


def load_documents(path_ref: str) -> list:
    """Load the extraction records from a JSON file."""
    path = Path(path_ref)
    if not path.exists():
        print(f"File '{path_ref}' not found.")
        sys.exit(1)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        print(f"File '{path_ref}' is not valid JSON: {e}")
        sys.exit(1)

    if isinstance(data, dict):
        data = data.get("documents", [])
    if not isinstance(data, list):
        print("Expected a list of records or an object with a 'documents' list.")
        sys.exit(1)
    return data


def run(documents: list, trace: bool = False, output_json: bool = False):
    """Run the analysis and print the report."""
    if trace:
        os.environ["LENDING_TRACE"] = "1"
        import importlib
        import app.config
        importlib.reload(app.config)

    import logging
    if trace:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    from app.pipeline.orchestrator import analyze

    try:
        result = analyze(documents)
    except (TypeError, ValueError) as e:
        print(f"Malformed input: {e}")
        sys.exit(1)

    if output_json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    risk = result.risk_assessment
    consistency = result.consistency
    profile = result.combined_profile

    # ── Pretty print results ──
    print(f"\n{'═' * 70}")
    print(f"  Loan Analysis — {profile.documents_analyzed} document(s): "
          f"{', '.join(profile.document_types) or 'none'}")
    print(f"{'═' * 70}\n")

    dti = f"{risk.dti_ratio:.1f}%" if risk.dti_ratio is not None else "N/A"
    print(f"  RISK SCORE {risk.overall_risk_score}/100 ({risk.risk_level}), "
          f"approval likelihood {risk.approval_likelihood}%, DTI {dti}")
    print(f"  {'─' * 60}")
    if risk.risk_factors:
        for f in risk.risk_factors:
            impact_icon = {"high": "🔴", "medium": "🟡", "low": "🟢"}.get(f.impact, "⚪")
            print(f"  {impact_icon} -{f.points_deducted:>2} [{f.category}] {f.description}")
    else:
        print("  No risk factors triggered.")
    print()

    print(f"  CONSISTENCY {consistency.consistency_score} ({consistency.data_quality}), "
          f"completeness {consistency.data_completeness:.0f}%")
    print(f"  {'─' * 60}")
    for doc_type in consistency.missing_documents:
        print(f"  ✗ Missing required document: {doc_type}")
    for item in consistency.inconsistencies:
        print(f"  ⚠ {item}")
    if not consistency.missing_documents and not consistency.inconsistencies:
        print("  All required documents present, no inconsistencies.")
    print()

    print(f"{'═' * 70}")
    print(f"  Decision: {result.decision}")
    print(f"{'═' * 70}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Lending Intelligence CLI — analyze a loan application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("records", nargs="?", help="JSON file of extraction records")
    parser.add_argument("--trace", action="store_true", help="Enable LENDING_TRACE debug output")
    parser.add_argument("--json", action="store_true", help="Output raw JSON instead of pretty print")

    args = parser.parse_args()

    if not args.records:
        parser.print_help()
        return

    documents = load_documents(args.records)
    run(documents, trace=args.trace, output_json=args.json)


if __name__ == "__main__":
    main()
