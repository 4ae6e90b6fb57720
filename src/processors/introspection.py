# src/processors/introspection.py — v1
"""Call-site processor."""

from __future__ import annotations

import logging
from typing import Any

from mellivora_logger.processors.base import BaseProcessor


class IntrospectionProcessor(BaseProcessor):
    """Adds the ``file``, ``line``, ``function`` and ``module`` of the log call."""

    def process(self, record: logging.LogRecord, extra: dict[str, Any]) -> None:
        extra["file"] = record.pathname
        extra["line"] = record.lineno
        extra["function"] = record.funcName
        extra["module"] = record.module
