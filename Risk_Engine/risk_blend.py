#!/usr/bin/env python3
"""Severity-weighted risk percentage from pattern detections, blended with the classifier score."""

from __future__ import annotations

import math

from Indicator_Engine.pattern_catalog import PatternDetection


MIN_SEVERITY_DENOMINATOR = 28
SEVERITY_DENOMINATOR_SHARE = 0.3

# (minimum detections, bonus points), checked in order.
DETECTION_COUNT_BONUS = ((5, 15), (3, 10), (2, 5))

VOICE_SCAM_LABEL = "Voice message scam"
VOICE_SCAM_FLOOR = 60
HIGH_SEVERITY_FLOOR = 75
FINANCIAL_FLOOR = 70
FINANCIAL_LABELS = (
    "Request for personal data",
    "Financial information request",
    "Payment upfront",
    "Remittance scam",
)
API_ONLY_FLOOR = 55

# (low, high, snapped) nudges away from just-under-threshold values.
THRESHOLD_SNAPS = ((48, 50, 50), (73, 75, 75), (23, 25, 25))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _pattern_percentage(detection: PatternDetection) -> int:
    if detection.max_possible_severity <= 0:
        return 0

    denominator = max(MIN_SEVERITY_DENOMINATOR, detection.max_possible_severity * SEVERITY_DENOMINATOR_SHARE)
    percent = min(100, _round_half_up(detection.total_severity / denominator * 100))
    for min_count, bonus in DETECTION_COUNT_BONUS:
        if detection.detected_count >= min_count:
            percent = min(100, percent + bonus)
            break

    matches = detection.pattern_matches
    if VOICE_SCAM_LABEL in matches:
        percent = max(percent, VOICE_SCAM_FLOOR)
    if any(match.severity >= 5 for match in matches.values()):
        percent = max(percent, HIGH_SEVERITY_FLOOR)
    if any(label in matches for label in FINANCIAL_LABELS):
        percent = max(percent, FINANCIAL_FLOOR)
    return percent


def calculate_risk_percentage(detection: PatternDetection, api_percent: float) -> int:
    """Blend the catalog-derived percentage with the upstream classifier's percentage."""
    calculated = _pattern_percentage(detection)
    if detection.detected_count == 0 and api_percent > 50:
        calculated = max(calculated, API_ONLY_FLOOR)

    if detection.detected_count >= 3:
        blended = _round_half_up(calculated * 0.7 + api_percent * 0.3)
    else:
        blended = _round_half_up(calculated * 0.5 + api_percent * 0.5)

    for low, high, snapped in THRESHOLD_SNAPS:
        if low <= blended < high:
            return snapped
    return blended
