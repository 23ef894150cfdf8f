#!/usr/bin/env python3
"""Deterministic indicator extraction from classifier explanation text.

Extraction cascade (most structured first):
1) Bullet-list items
2) Numbered-list items (appended to bullet items)
3) Sentences after an introduction phrase
4) Continuations of key lead-in phrases
5) Leading sentences of the explanation

Every stage degrades to an empty list; the cascade never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Callable


logger = logging.getLogger(__name__)

MAX_INDICATORS = 5
MIN_ITEM_CHARS = 6
MIN_SENTENCE_CHARS = 6
MIN_INDICATOR_CHARS = 4
INTRO_SENTENCE_LIMIT = 5
LEADING_SENTENCE_LIMIT = 3
FALLBACK_WORD_LIMIT = 4

# Unambiguous glyphs start a bullet anywhere; dash and asterisk only when
# they stand alone between whitespace.
BULLET_GLYPHS = ("•", "◦", "▪", "‣")
LINE_BULLET_GLYPHS = ("-", "*")

INTRODUCTION_PHRASES = (
    "indicators include:",
    "red flags include:",
    "suspicious elements include:",
    "warning signs include:",
    "suspicious indicators include:",
    "concerning elements include:",
    "signs of a threat:",
    "threat indicators:",
    "suspicious patterns:",
    "red flags:",
    "concerning aspects:",
    "alarm bells include:",
    "suspicious factors:",
    "signs include:",
    "signs of a scam:",
)

KEY_PHRASES = (
    "this message contains",
    "i detected",
    "this contains",
    "suspicious due to",
    "appears to be",
    "this shows signs of",
    "this is likely",
    "red flag is",
    "contains elements of",
)

PHRASE_VERBS = (
    "contains",
    "presents",
    "includes",
    "with",
    "has",
    "showing",
    "claiming",
    "uses",
)

_STRONG = "".join(re.escape(ch) for ch in BULLET_GLYPHS)
_WEAK = "".join(re.escape(ch) for ch in LINE_BULLET_GLYPHS)
_BULLET_RE = re.compile(
    rf"(?:[{_STRONG}]|(?:^|(?<=\s))[{_WEAK}](?=\s))"
    rf"((?:(?!\s[{_WEAK}]\s)[^\n{_STRONG}])+)",
    re.MULTILINE,
)
_NUMBERED_RE = re.compile(r"\d+\.\s+([^\n]+)")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]")
_INTRODUCTION_RES = tuple(
    (phrase, re.compile(re.escape(phrase), re.IGNORECASE)) for phrase in INTRODUCTION_PHRASES
)
_KEY_PHRASE_RES = tuple(
    re.compile(re.escape(phrase) + r"\s+([^.!?]+)[.!?]", re.IGNORECASE) for phrase in KEY_PHRASES
)
_PHRASE_TEMPLATE_RES = tuple(
    re.compile(rf"{verb}\s+(\w+(?:\s+\w+){{0,3}})", re.IGNORECASE) for verb in PHRASE_VERBS
)
_TRAILING_PUNCT_RE = re.compile(r"[.,;:!?].*$", re.DOTALL)
_EDGE_NON_WORD_RE = re.compile(r"^\W+|\W+$")


def _sentences(text: str, limit: int) -> list[str]:
    kept = [part.strip() for part in _SENTENCE_SPLIT_RE.split(text) if len(part.strip()) >= MIN_SENTENCE_CHARS]
    return kept[:limit]


def _bullet_items(text: str) -> list[str]:
    items = [match.group(1).strip() for match in _BULLET_RE.finditer(text)]
    return [item for item in items if len(item) >= MIN_ITEM_CHARS]


def _numbered_items(text: str) -> list[str]:
    items = [match.group(1).strip() for match in _NUMBERED_RE.finditer(text)]
    return [item for item in items if len(item) >= MIN_ITEM_CHARS]


def _introduction_items(text: str) -> list[str]:
    for phrase, pattern in _INTRODUCTION_RES:
        match = pattern.search(text)
        if match is None:
            continue
        sentences = _sentences(text[match.end() :].strip(), INTRO_SENTENCE_LIMIT)
        if sentences:
            logger.debug("introduction phrase matched: %s", phrase)
            return sentences
    return []


def _key_phrase_items(text: str) -> list[str]:
    # A continuation must end at a terminator, so nothing past the last one can match.
    end = max(text.rfind(mark) for mark in ".!?")
    if end < 0:
        return []
    scope = text[: end + 1]

    items: list[str] = []
    for pattern in _KEY_PHRASE_RES:
        match = pattern.search(scope)
        if match and match.group(1).strip():
            items.append(match.group(1).strip())
    return items


def _leading_sentence_items(text: str) -> list[str]:
    return _sentences(text, LEADING_SENTENCE_LIMIT)


_FALLBACK_STAGES: tuple[tuple[str, Callable[[str], list[str]]], ...] = (
    ("introduction_phrase", _introduction_items),
    ("key_phrase", _key_phrase_items),
    ("leading_sentences", _leading_sentence_items),
)


def _raw_indicators(text: str) -> list[str]:
    # Numbered items are additive signal on top of bullets; later stages are strict fallbacks.
    items = _bullet_items(text) + _numbered_items(text)
    if items:
        logger.debug("list stages produced %d raw indicators", len(items))
        return items
    for stage, extract in _FALLBACK_STAGES:
        items = extract(text)
        if items:
            logger.debug("%s stage produced %d raw indicators", stage, len(items))
            return items
    return []


def condense_indicator(raw: str) -> str:
    """Reduce one raw indicator to a short phrase."""
    for pattern in _PHRASE_TEMPLATE_RES:
        match = pattern.search(raw)
        if match and len(match.group(1)) >= MIN_ITEM_CHARS:
            return match.group(1).strip()

    head = " ".join(raw.split()[:FALLBACK_WORD_LIMIT])
    head = _TRAILING_PUNCT_RE.sub("", head)
    return _EDGE_NON_WORD_RE.sub("", head)


def _finalize(values: list[str]) -> list[str]:
    unique = list(dict.fromkeys(values))
    kept = [value for value in unique if len(value) >= MIN_INDICATOR_CHARS][:MAX_INDICATORS]
    return [value[:1].upper() + value[1:] for value in kept]


def extract_threat_indicators(explanation_text: str | None) -> list[str]:
    """Return up to five short indicator phrases found in ``explanation_text``."""
    text = str(explanation_text or "")
    if not text:
        return []
    return _finalize([condense_indicator(item) for item in _raw_indicators(text)])
