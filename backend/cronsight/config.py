"""Environment-driven settings, read at call time so tests can override them."""

from __future__ import annotations

import os


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
