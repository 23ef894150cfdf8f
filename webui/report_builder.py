#!/usr/bin/env python3
"""Build the risk report payload rendered by the Web UI."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from Indicator_Engine.indicator_extractor import extract_threat_indicators
from Indicator_Engine.pattern_catalog import detect_pattern_indicators
from Risk_Engine.risk_blend import calculate_risk_percentage
from Risk_Engine.risk_tiers import (
    classify_risk,
    consistent_status_label,
    probability_percent,
    summary_conflicts_with_risk,
)


logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"
MAX_PATTERN_INDICATORS = 5


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def build_risk_report(
    explanation: str | None,
    status: str | None = None,
    probability: str | float | int | None = None,
    content: str | None = None,
    summary: str | None = None,
) -> dict[str, Any]:
    tier = classify_risk(status=status, probability=probability)
    risk_percentage = probability_percent(probability)

    report: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "generated_at": _now_iso(),
        "indicators": extract_threat_indicators(explanation),
        "risk": tier.as_dict(),
        "risk_percentage": risk_percentage,
        "status_label": consistent_status_label(risk_percentage) if risk_percentage is not None else tier.label,
        "summary_inconsistent": (
            summary_conflicts_with_risk(summary, risk_percentage) if risk_percentage is not None else False
        ),
    }

    if content:
        detection = detect_pattern_indicators(content)
        report["pattern_indicators"] = detection.detected_labels()[:MAX_PATTERN_INDICATORS]
        if risk_percentage is not None:
            report["blended_risk_percentage"] = calculate_risk_percentage(detection, risk_percentage)
        logger.debug(
            "pattern detection: %d categories, total severity %.2f",
            detection.detected_count,
            detection.total_severity,
        )

    return report


def main() -> None:
    parser = argparse.ArgumentParser(description="Build a risk report from classifier explanation text.")
    parser.add_argument("--explanation", default="", help="Explanation text (use '-' to read stdin)")
    parser.add_argument("--status", default=None, help="Status label from the classifier")
    parser.add_argument("--probability", default=None, help="Scam probability, e.g. '80%%' or '75-100%%'")
    parser.add_argument("--content", default=None, help="Original message content for pattern detection")
    parser.add_argument("--summary", default=None, help="Risk summary to check against the tier")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    explanation = sys.stdin.read() if args.explanation == "-" else args.explanation

    report = build_risk_report(
        explanation=explanation,
        status=args.status,
        probability=args.probability,
        content=args.content,
        summary=args.summary,
    )
    print(json.dumps(report, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
