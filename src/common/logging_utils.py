"""Centralized logging helpers.

Provides a single ``configure_logging`` entry point plus small utilities used
for structured DEBUG traces across loaders, versioning and HTTP helpers.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_CONTEXT_KEYS = (
    "event",
    "component",
    "action",
    "outcome",
    "target",
    "loader",
    "status_code",
    "duration_ms",
    "attempt",
    "count",
)


class _ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        parts = []
        for key in _CONTEXT_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                parts.append(f"{key}={value}")
        if parts and record.levelno <= logging.DEBUG:
            return f"{base} [{' '.join(parts)}]"
        return base


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once, honoring MODTREE_LOG_LEVEL.

    Args:
        level: Optional explicit level name; falls back to the environment.
    """
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level_value)
    if not any(getattr(h, "_modtree", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
        handler._modtree = True  # type: ignore[attr-defined]
        root.addHandler(handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping Nones."""
    return {k: v for k, v in fields.items() if v is not None}


def safe_url(url: str) -> str:
    """Strip credentials, query and fragment from a URL before logging it."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<invalid-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
