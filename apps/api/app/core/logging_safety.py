"""Utilities for safe structured logging fields."""

from __future__ import annotations

import hashlib
import logging
from typing import Any


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for log correlation fields.

    Subjects and raw tokens must never reach the log stream verbatim.
    """
    text = str(value or "").strip()
    if not text:
        return f"{prefix}-none"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return f"{prefix}-{digest}"


def configure_app_logging(level: str) -> None:
    """Apply the configured level to the application logger tree."""
    logging.getLogger("app").setLevel(level.upper())
