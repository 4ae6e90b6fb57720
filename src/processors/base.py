# src/processors/base.py — v1
"""Base class for processors that append metadata to ``record.extra``.

Processors are ``logging.Filter`` objects that never reject a record, so
they attach to handlers (or loggers) with ``addFilter`` like any filter.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from mellivora_logger.core.levels import parse_level
from mellivora_logger.core.records import get_extra


class BaseProcessor(logging.Filter, ABC):
    """Enrich records at or above ``level``; pass the rest through."""

    def __init__(self, level: int | str = logging.DEBUG) -> None:
        super().__init__()
        self.level = parse_level(level)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= self.level:
            self.process(record, get_extra(record))
        return True

    @abstractmethod
    def process(self, record: logging.LogRecord, extra: dict[str, Any]) -> None:
        """Add this processor's fields to ``extra``."""
