# src/processors/timing.py — v1
"""Elapsed time between consecutive records of a channel.

The per-channel bookkeeping lives in a ``TimingStore`` that is passed in
rather than held in class state, so independent factories (and tests) do
not share timings.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from mellivora_logger.core.records import record_to_dict
from mellivora_logger.processors.base import BaseProcessor


@dataclass(frozen=True)
class TimingPoint:
    """Last record seen on a channel."""

    time: float
    digest: str
    cost: float = 0.0


class TimingStore:
    """Keyed store of the last timing point per channel."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._points: dict[str, TimingPoint] = {}

    def __len__(self) -> int:
        return len(self._points)

    def get(self, channel: str) -> TimingPoint | None:
        return self._points.get(channel)

    def mark(self, channel: str, digest: str) -> TimingPoint:
        """Register a record on ``channel`` and return its timing point.

        The same record content seen again (another handler processing the
        record that was just timed) keeps the previous point.
        """
        now = self._clock()
        previous = self._points.get(channel)
        if previous is None:
            point = TimingPoint(time=now, digest=digest, cost=0.0)
        elif previous.digest != digest:
            point = TimingPoint(
                time=now, digest=digest, cost=round(now - previous.time, 6)
            )
        else:
            return previous
        self._points[channel] = point
        return point

    def clear(self) -> None:
        self._points.clear()


def record_digest(record: logging.LogRecord) -> str:
    """Content hash of a record, ignoring processor-added metadata."""
    payload = json.dumps(record_to_dict(record), sort_keys=True, default=str)
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


class CostTimeProcessor(BaseProcessor):
    """Adds ``cost``: seconds since the previous record on the channel."""

    def __init__(
        self, level: int | str = logging.DEBUG, store: TimingStore | None = None
    ) -> None:
        super().__init__(level)
        self.store = store if store is not None else TimingStore()

    def process(self, record: logging.LogRecord, extra: dict[str, Any]) -> None:
        extra["cost"] = self.store.mark(record.name, record_digest(record)).cost
