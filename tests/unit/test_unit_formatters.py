# tests/unit/test_unit_formatters.py — v1
"""Tests for formatters.py."""

from __future__ import annotations

import json
import logging
import sys

from mellivora_logger.formatters import JsonFormatter, LineFormatter


class TestLineFormatter:
    def test_context_rendered_as_json(self, make_record):
        record = make_record(message="created", context={"id": 7})
        line = LineFormatter("%(levelname)s %(message)s %(context)s").format(record)
        assert line == 'INFO created {"id": 7}'

    def test_empty_maps_render_empty(self, make_record):
        line = LineFormatter("%(message)s %(context)s %(extra)s").format(make_record(message="m"))
        assert line == "m"

    def test_record_maps_restored(self, make_record):
        record = make_record(context={"a": 1})
        LineFormatter().format(record)
        assert record.context == {"a": 1}
        assert record.extra == {}

    def test_foreign_record(self):
        record = logging.LogRecord("plain", logging.WARNING, __file__, 3, "bare", None, None)
        line = LineFormatter("[%(name)s] %(message)s %(context)s").format(record)
        assert line == "[plain] bare"

    def test_default_format_contains_channel(self, make_record):
        line = LineFormatter().format(make_record(channel="order"))
        assert "[order][INFO] hello" in line


class TestJsonFormatter:
    def test_fields(self, make_record):
        record = make_record(channel="api", message="hi", context={"k": "v"})
        record.extra["cost"] = 0.5
        data = json.loads(JsonFormatter().format(record))
        assert data["channel"] == "api"
        assert data["level"] == "INFO"
        assert data["message"] == "hi"
        assert data["context"] == {"k": "v"}
        assert data["extra"] == {"cost": 0.5}
        assert data["timestamp"].endswith("+00:00")

    def test_without_extra(self, make_record):
        data = json.loads(JsonFormatter(include_extra=False).format(make_record()))
        assert "extra" not in data

    def test_exception_included(self, make_record):
        record = make_record()
        try:
            raise ValueError("bad")
        except ValueError:
            record.exc_info = sys.exc_info()
        data = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad" in data["exception"]

    def test_unserializable_values(self, make_record):
        record = make_record(context={"obj": object()})
        data = json.loads(JsonFormatter().format(record))
        assert data["context"]["obj"].startswith("<object object")
