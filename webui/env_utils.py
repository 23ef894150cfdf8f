#!/usr/bin/env python3
"""Environment helpers for local service configuration."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv as _dotenv_load


def load_dotenv(path: str | Path) -> bool:
    """Load ``path`` into the environment without overriding variables already set."""
    env_path = Path(path)
    if not env_path.exists():
        return False
    return bool(_dotenv_load(env_path, override=False))


def env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if min_value is not None and value < min_value:
        return min_value
    return value
