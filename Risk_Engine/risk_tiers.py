#!/usr/bin/env python3
"""Risk percentage parsing and tier classification with display metadata."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any


VERY_HIGH_THRESHOLD = 75.0
HIGH_THRESHOLD = 50.0
MODERATE_THRESHOLD = 25.0
# Status text that only says "low risk" carries no number; rendered as 10%.
LOW_STATUS_PERCENT = 10.0

_NUMBER_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)")
_PERCENT_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)%")


@dataclass(frozen=True)
class RiskTier:
    key: str
    label: str
    color: str
    icon: str
    container_classes: str
    text_classes: str
    badge_classes: str
    bar_color: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


VERY_HIGH = RiskTier(
    key="very_high",
    label="Very High Risk",
    color="red",
    icon="🚨",
    container_classes="bg-gradient-to-br from-rose-100 via-red-100 to-pink-100 border-rose-300",
    text_classes="text-slate-800",
    badge_classes="bg-gradient-to-r from-red-500 to-rose-600 text-white shadow-lg",
    bar_color="bg-gradient-to-r from-red-400 to-rose-500",
)
HIGH = RiskTier(
    key="high",
    label="High Risk",
    color="orange",
    icon="⚠️",
    container_classes="bg-gradient-to-br from-orange-100 via-amber-100 to-yellow-100 border-orange-300",
    text_classes="text-slate-800",
    badge_classes="bg-gradient-to-r from-orange-500 to-amber-500 text-white shadow-lg",
    bar_color="bg-gradient-to-r from-orange-400 to-amber-400",
)
MODERATE = RiskTier(
    key="moderate",
    label="Moderate Risk",
    color="yellow",
    icon="⚠️",
    container_classes="bg-gradient-to-br from-yellow-100 via-amber-100 to-lime-100 border-yellow-300",
    text_classes="text-slate-800",
    badge_classes="bg-gradient-to-r from-yellow-500 to-amber-500 text-white shadow-lg",
    bar_color="bg-gradient-to-r from-yellow-400 to-amber-400",
)
LOW = RiskTier(
    key="low",
    label="Low Risk",
    color="green",
    icon="✅",
    container_classes="bg-gradient-to-br from-green-100 via-emerald-100 to-teal-100 border-green-300",
    text_classes="text-slate-800",
    badge_classes="bg-gradient-to-r from-green-500 to-emerald-500 text-white shadow-lg",
    bar_color="bg-gradient-to-r from-green-400 to-emerald-400",
)
NORMAL = RiskTier(
    key="normal",
    label="Normal Conversation",
    color="blue",
    icon="💬",
    container_classes="bg-gradient-to-br from-blue-100 via-sky-100 to-cyan-100 border-blue-300",
    text_classes="text-slate-800",
    badge_classes="bg-blue-500 text-white",
    bar_color="bg-blue-500",
)
UNKNOWN = RiskTier(
    key="unknown",
    label="Unknown",
    color="gray",
    icon="ℹ️",
    container_classes="bg-gradient-to-br from-gray-100 via-slate-100 to-zinc-100 border-gray-300",
    text_classes="text-slate-800",
    badge_classes="bg-gray-500 text-white",
    bar_color="bg-gray-500",
)

# Evaluated top-down; first threshold reached wins.
PERCENT_TIERS: tuple[tuple[float, RiskTier], ...] = (
    (VERY_HIGH_THRESHOLD, VERY_HIGH),
    (HIGH_THRESHOLD, HIGH),
    (MODERATE_THRESHOLD, MODERATE),
)

STATUS_LABELS = {
    VERY_HIGH.key: "Very High Risk Content",
    HIGH.key: "High Risk Content",
    MODERATE.key: "Moderate Risk Content",
    LOW.key: "Low Risk Content",
}

LOW_RISK_SUMMARY_KEYWORDS = ("safe", "no suspicious", "no concerning", "low risk", "minimal risk")
HIGH_RISK_SUMMARY_KEYWORDS = ("dangerous", "critical", "very high", "multiple strong", "alarming")


def _first_number(value: str) -> float:
    match = _NUMBER_RE.search(value)
    return float(match.group(1)) if match else 0.0


def extract_percentage(value: str | None) -> float:
    """Parse ``"75%"``, ``"75-100%"`` or ``"about 60"`` into a percentage; 0 when absent."""
    text = str(value or "")
    if not text:
        return 0.0

    if "-" in text:
        parts = text.split("-")
        return (_first_number(parts[0]) + _first_number(parts[1])) / 2

    match = _PERCENT_RE.search(text)
    if match:
        return float(match.group(1))
    return _first_number(text)


def classify_percentage(percent: float) -> RiskTier:
    for threshold, tier in PERCENT_TIERS:
        if percent >= threshold:
            return tier
    return LOW


def _status_percent(status: str) -> float | None:
    low = status.lower()
    if "very high risk" in low:
        return VERY_HIGH_THRESHOLD
    if "high risk" in low and "very" not in low and "medium" not in low:
        return HIGH_THRESHOLD
    if "moderate risk" in low or "medium risk" in low:
        return MODERATE_THRESHOLD
    if "low risk" in low:
        return LOW_STATUS_PERCENT
    return None


def probability_percent(probability: str | float | int | None) -> float | None:
    if probability is None or isinstance(probability, bool):
        return None
    if isinstance(probability, (int, float)):
        return float(probability)
    if probability == "":
        return None
    return extract_percentage(probability)


def classify_risk(
    status: str | None = None,
    probability: str | float | int | None = None,
) -> RiskTier:
    """Map a probability (preferred) or a free-text status to a risk tier."""
    percent = probability_percent(probability)
    if percent is not None:
        return classify_percentage(percent)

    status_text = str(status or "")
    status_percent = _status_percent(status_text)
    if status_percent is not None:
        return classify_percentage(status_percent)
    if "normal conversation" in status_text.lower():
        return NORMAL
    return UNKNOWN


def consistent_status_label(percent: float) -> str:
    return STATUS_LABELS[classify_percentage(percent).key]


def summary_conflicts_with_risk(summary: str | None, percent: float) -> bool:
    """True when a risk summary's wording contradicts the numeric tier."""
    low = str(summary or "").lower()
    if not low:
        return False
    if percent >= HIGH_THRESHOLD and any(keyword in low for keyword in LOW_RISK_SUMMARY_KEYWORDS):
        return True
    if percent < MODERATE_THRESHOLD and any(keyword in low for keyword in HIGH_RISK_SUMMARY_KEYWORDS):
        return True
    return False
