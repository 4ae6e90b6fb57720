# src/handlers/base.py — v1
"""Base class for handlers that take part in a channel logger's stack.

A channel handler differs from a plain ``logging.Handler`` in two ways:
``handle()`` reports whether propagation to the next handler should stop
(the ``bubble`` flag), and processors are attached as filters that enrich
the record before it is formatted.
"""

from __future__ import annotations

import logging
from typing import Callable, Union

from mellivora_logger.core.levels import parse_level

Processor = Union[logging.Filter, Callable[[logging.LogRecord], object]]


class ChannelHandler(logging.Handler):
    """Level-gated handler with a processor chain and a bubble flag."""

    def __init__(self, level: int | str = logging.DEBUG, bubble: bool = True) -> None:
        super().__init__(parse_level(level))
        self.bubble = bubble

    def is_handling(self, record: logging.LogRecord) -> bool:
        """Return True if the record meets this handler's minimum level."""
        return record.levelno >= self.level

    @property
    def processors(self) -> list[Processor]:
        return list(self.filters)

    def push_processor(self, processor: Processor) -> None:
        """Append a processor; processors run in the order they were pushed."""
        self.addFilter(processor)

    def pop_processor(self) -> Processor:
        """Remove and return the most recently pushed processor."""
        if not self.filters:
            raise IndexError("pop from empty processor stack")
        return self.filters.pop()

    def handle(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        """Process, format and emit a record.

        Returns:
            True when the record must not reach the next handler in the stack.
        """
        if not self.is_handling(record):
            return False

        rv = self.filter(record)
        if not rv:
            return False
        if isinstance(rv, logging.LogRecord):
            record = rv

        self.acquire()
        try:
            self.emit(record)
        finally:
            self.release()

        return not self.bubble
