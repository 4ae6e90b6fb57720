# src/core/records.py — v1
"""Accessors for the structured maps carried on ``logging.LogRecord``.

Channel loggers attach two dicts to every record they build:
``context`` (caller-supplied data) and ``extra`` (metadata appended by
processors). Records created elsewhere may lack them, so handlers and
processors go through these helpers.
"""

from __future__ import annotations

import logging
from typing import Any


def get_context(record: logging.LogRecord) -> dict[str, Any]:
    """Return the record's context map, creating it if missing."""
    context = getattr(record, "context", None)
    if not isinstance(context, dict):
        context = {}
        record.context = context
    return context


def get_extra(record: logging.LogRecord) -> dict[str, Any]:
    """Return the record's mutable extra map, creating it if missing."""
    extra = getattr(record, "extra", None)
    if not isinstance(extra, dict):
        extra = {}
        record.extra = extra
    return extra


def record_to_dict(record: logging.LogRecord) -> dict[str, Any]:
    """Snapshot of the fields that identify a record's content."""
    return {
        "channel": record.name,
        "level": record.levelno,
        "message": record.getMessage(),
        "context": get_context(record),
        "created": record.created,
    }
