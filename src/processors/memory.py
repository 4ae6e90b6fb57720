# src/processors/memory.py — v1
"""Memory usage processors."""

from __future__ import annotations

import logging
import os
import resource
import sys
import tracemalloc
from typing import Any

from mellivora_logger.processors.base import BaseProcessor
from mellivora_logger.processors.timing import TimingStore, record_digest


def peak_memory_usage() -> int:
    """Peak resident set size of this process, in bytes."""
    rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # macOS reports bytes, Linux reports kilobytes
    return rss if sys.platform == "darwin" else rss * 1024


def current_memory_usage(real_usage: bool = True) -> int:
    """Current memory usage in bytes.

    With ``real_usage`` the resident set size is reported; otherwise the
    Python heap traced by ``tracemalloc`` when tracing is active.
    """
    if not real_usage and tracemalloc.is_tracing():
        return tracemalloc.get_traced_memory()[0]
    try:
        with open("/proc/self/statm", encoding="ascii") as fh:
            resident_pages = int(fh.read().split()[1])
        return resident_pages * os.sysconf("SC_PAGE_SIZE")
    except (OSError, ValueError, IndexError):
        return peak_memory_usage()


def format_bytes(num_bytes: int | float) -> str:
    """Render a byte count as e.g. ``"1.5 MB"``."""
    num_bytes = int(num_bytes)
    if num_bytes >= 1024**3:
        return f"{round(num_bytes / 1024**3, 2)} GB"
    if num_bytes >= 1024**2:
        return f"{round(num_bytes / 1024**2, 2)} MB"
    if num_bytes >= 1024:
        return f"{round(num_bytes / 1024, 2)} KB"
    return f"{num_bytes} B"


class MemoryProcessor(BaseProcessor):
    """Adds ``memory``: current memory usage of the process."""

    def __init__(
        self,
        level: int | str = logging.DEBUG,
        real_usage: bool = True,
        use_formatting: bool = True,
    ) -> None:
        super().__init__(level)
        self.real_usage = real_usage
        self.use_formatting = use_formatting

    def process(self, record: logging.LogRecord, extra: dict[str, Any]) -> None:
        usage = current_memory_usage(self.real_usage)
        extra["memory"] = format_bytes(usage) if self.use_formatting else usage


class ProfilerProcessor(BaseProcessor):
    """Adds ``cost``, ``memory_usage`` and ``memory_peak_usage``."""

    def __init__(
        self, level: int | str = logging.DEBUG, store: TimingStore | None = None
    ) -> None:
        super().__init__(level)
        self.store = store if store is not None else TimingStore()

    def process(self, record: logging.LogRecord, extra: dict[str, Any]) -> None:
        extra["cost"] = self.store.mark(record.name, record_digest(record)).cost
        extra["memory_usage"] = format_bytes(current_memory_usage())
        extra["memory_peak_usage"] = format_bytes(peak_memory_usage())
