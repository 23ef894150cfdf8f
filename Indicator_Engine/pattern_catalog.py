#!/usr/bin/env python3
"""Catalog-driven scam pattern detection over raw message content."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml


logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "pattern_catalog.yaml"
CATALOG_PATH_ENV = "INDICATOR_PATTERN_CATALOG"

HIGH_SEVERITY = 4
HIGH_SEVERITY_THRESHOLD = 0.1
DEFAULT_THRESHOLD = 0.15
CONFIDENCE_BOOST = 1.5
# Short patterns ("tm", "sim") are substring matches; longer ones need word boundaries.
WORD_BOUNDARY_MIN_CHARS = 4


@dataclass(frozen=True)
class PatternCategory:
    label: str
    severity: int
    patterns: tuple[str, ...]


@dataclass(frozen=True)
class IndicatorMatch:
    severity: int
    confidence: float
    matches: int


@dataclass(frozen=True)
class PatternDetection:
    pattern_matches: dict[str, IndicatorMatch] = field(default_factory=dict)
    total_severity: float = 0.0
    max_possible_severity: int = 0
    detected_count: int = 0

    def detected_labels(self) -> list[str]:
        """Detected category labels, strongest first, catalog order on ties."""
        ranked = sorted(
            enumerate(self.pattern_matches.items()),
            key=lambda row: (-row[1][1].severity, -row[1][1].confidence, row[0]),
        )
        return [label for _, (label, _match) in ranked]


def _load_json_or_yaml(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"Cannot parse {path}") from exc
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected mapping in {path}")
    return parsed


def _parse_category(row: Any, path: Path) -> PatternCategory:
    if not isinstance(row, dict):
        raise ValueError(f"Expected category mapping in {path}")
    label = str(row.get("label") or "").strip()
    if not label:
        raise ValueError(f"Category without label in {path}")
    try:
        severity = int(row.get("severity"))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Category {label!r} has invalid severity in {path}") from exc
    patterns = tuple(str(p).strip().lower() for p in (row.get("patterns") or []) if str(p).strip())
    if not patterns:
        raise ValueError(f"Category {label!r} has no patterns in {path}")
    return PatternCategory(label=label, severity=severity, patterns=patterns)


@lru_cache(maxsize=8)
def _load_catalog_cached(path: str) -> tuple[PatternCategory, ...]:
    resolved = Path(path)
    doc = _load_json_or_yaml(resolved)
    rows = doc.get("categories")
    if not isinstance(rows, list):
        raise ValueError(f"Expected 'categories' list in {resolved}")
    catalog = tuple(_parse_category(row, resolved) for row in rows)
    logger.debug("loaded %d pattern categories from %s", len(catalog), resolved)
    return catalog


def load_pattern_catalog(path: str | Path | None = None) -> tuple[PatternCategory, ...]:
    raw = str(path or os.getenv(CATALOG_PATH_ENV, "") or DEFAULT_CATALOG_PATH)
    return _load_catalog_cached(str(Path(raw).expanduser().resolve()))


@lru_cache(maxsize=2048)
def _pattern_regex(pattern: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(pattern)}\b", re.IGNORECASE)


def _pattern_hit(pattern: str, lower_content: str) -> bool:
    if len(pattern) >= WORD_BOUNDARY_MIN_CHARS:
        return _pattern_regex(pattern).search(lower_content) is not None
    return pattern in lower_content


def detect_pattern_indicators(
    content: str | None,
    catalog: Sequence[PatternCategory] | None = None,
) -> PatternDetection:
    categories = load_pattern_catalog() if catalog is None else catalog
    lower_content = str(content or "").lower()

    pattern_matches: dict[str, IndicatorMatch] = {}
    total_severity = 0.0
    max_possible_severity = 0

    for category in categories:
        max_possible_severity += category.severity
        if not lower_content:
            continue
        hits = sum(1 for pattern in category.patterns if _pattern_hit(pattern, lower_content))
        confidence = hits / len(category.patterns)
        threshold = HIGH_SEVERITY_THRESHOLD if category.severity >= HIGH_SEVERITY else DEFAULT_THRESHOLD
        if hits == 0 or confidence < threshold:
            continue
        pattern_matches[category.label] = IndicatorMatch(
            severity=category.severity,
            confidence=confidence,
            matches=hits,
        )
        total_severity += category.severity * min(1.0, confidence * CONFIDENCE_BOOST)

    return PatternDetection(
        pattern_matches=pattern_matches,
        total_severity=total_severity,
        max_possible_severity=max_possible_severity,
        detected_count=len(pattern_matches),
    )
