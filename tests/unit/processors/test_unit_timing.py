# tests/unit/processors/test_unit_timing.py — v1
"""Tests for processors/timing.py."""

from __future__ import annotations

import logging

from mellivora_logger.processors.timing import CostTimeProcessor, TimingStore, record_digest


class _Ticker:
    def __init__(self, *values: float) -> None:
        self.values = list(values)

    def __call__(self) -> float:
        return self.values.pop(0)


class TestTimingStore:
    def test_first_mark_costs_nothing(self):
        store = TimingStore(clock=_Ticker(100.0))
        assert store.mark("api", "d1").cost == 0.0
        assert len(store) == 1

    def test_cost_between_records(self):
        store = TimingStore(clock=_Ticker(100.0, 101.25))
        store.mark("api", "d1")
        assert store.mark("api", "d2").cost == 1.25

    def test_same_digest_keeps_point(self):
        store = TimingStore(clock=_Ticker(100.0, 101.0, 105.0))
        store.mark("api", "d1")
        point = store.mark("api", "d2")
        assert store.mark("api", "d2") is point

    def test_channels_independent(self):
        store = TimingStore(clock=_Ticker(1.0, 5.0, 6.0))
        store.mark("api", "a")
        store.mark("web", "b")
        assert store.mark("api", "c").cost == 5.0
        assert store.get("web").time == 5.0

    def test_clear(self):
        store = TimingStore(clock=_Ticker(1.0))
        store.mark("api", "a")
        store.clear()
        assert len(store) == 0
        assert store.get("api") is None


class TestRecordDigest:
    def test_ignores_extra(self, make_record):
        record = make_record()
        before = record_digest(record)
        record.extra["memory"] = "1 MB"
        assert record_digest(record) == before

    def test_differs_by_message(self, make_record):
        a = make_record(message="a")
        b = make_record(message="b")
        b.created = a.created
        assert record_digest(a) != record_digest(b)


class TestCostTimeProcessor:
    def test_sets_cost(self, make_record):
        processor = CostTimeProcessor(store=TimingStore(clock=_Ticker(10.0, 10.5)))
        first, second = make_record(message="one"), make_record(message="two")
        assert processor.filter(first) is True
        processor.filter(second)
        assert first.extra["cost"] == 0.0
        assert second.extra["cost"] == 0.5

    def test_below_level_untouched(self, make_record):
        processor = CostTimeProcessor(level="ERROR")
        record = make_record(level=logging.INFO)
        assert processor.filter(record) is True
        assert "cost" not in record.extra

    def test_shared_store_between_handlers(self, make_record):
        store = TimingStore(clock=_Ticker(1.0, 2.0, 4.0))
        first_handler, second_handler = CostTimeProcessor(store=store), CostTimeProcessor(store=store)
        first_handler.filter(make_record(message="one"))
        record = make_record(message="two")
        first_handler.filter(record)
        cost = record.extra["cost"]
        second_handler.filter(record)
        assert record.extra["cost"] == cost == 1.0
