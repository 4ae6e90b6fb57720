# tests/unit/processors/test_unit_memory.py — v1
"""Tests for processors/memory.py."""

from __future__ import annotations

import re

import pytest

from mellivora_logger.processors import memory
from mellivora_logger.processors.memory import (
    MemoryProcessor,
    ProfilerProcessor,
    current_memory_usage,
    format_bytes,
    peak_memory_usage,
)
from mellivora_logger.processors.timing import TimingStore

SIZE = re.compile(r"^\d+(\.\d+)? (B|KB|MB|GB)$")


class TestFormatBytes:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (512, "512 B"),
            (1536, "1.5 KB"),
            (5 * 1024**2, "5.0 MB"),
            (3 * 1024**3, "3.0 GB"),
        ],
    )
    def test_units(self, value, expected):
        assert format_bytes(value) == expected


class TestUsage:
    def test_current_usage_positive(self):
        assert current_memory_usage() > 0

    def test_peak_usage_positive(self):
        assert peak_memory_usage() > 0

    def test_falls_back_to_peak(self, monkeypatch):
        def broken_open(*args, **kwargs):
            raise OSError("no procfs")

        monkeypatch.setattr(memory, "open", broken_open, raising=False)
        monkeypatch.setattr(memory, "peak_memory_usage", lambda: 4096)
        assert current_memory_usage() == 4096


class TestMemoryProcessor:
    def test_formatted(self, make_record):
        record = make_record()
        MemoryProcessor().filter(record)
        assert SIZE.match(record.extra["memory"])

    def test_raw_bytes(self, make_record):
        record = make_record()
        MemoryProcessor(use_formatting=False).filter(record)
        assert isinstance(record.extra["memory"], int)

    def test_profiler_fields(self, make_record):
        record = make_record()
        ProfilerProcessor(store=TimingStore()).filter(record)
        assert record.extra["cost"] == 0.0
        assert SIZE.match(record.extra["memory_usage"])
        assert SIZE.match(record.extra["memory_peak_usage"])
