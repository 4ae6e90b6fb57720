# tests/unit/core/test_unit_levels.py — v1
"""Tests for core/levels.py."""

from __future__ import annotations

import logging

import pytest

from mellivora_logger.core.levels import LEVEL_NAMES, parse_level


class TestParseLevel:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            (" Warning ", logging.WARNING),
            ("warn", logging.WARNING),
            ("error", logging.ERROR),
            ("critical", logging.CRITICAL),
        ],
    )
    def test_names(self, name, expected):
        assert parse_level(name) == expected

    def test_integer_passthrough(self):
        assert parse_level(35) == 35

    def test_extended_levels_ordered(self):
        assert logging.INFO < parse_level("notice") < logging.WARNING
        assert logging.CRITICAL < parse_level("alert") < parse_level("emergency")

    def test_extended_levels_named(self):
        assert logging.getLevelName(LEVEL_NAMES["NOTICE"]) == "NOTICE"

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Invalid level string"):
            parse_level("verbose")

    @pytest.mark.parametrize("value", [True, 1.5, None])
    def test_wrong_type(self, value):
        with pytest.raises(ValueError):
            parse_level(value)
