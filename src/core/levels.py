# src/core/levels.py — v1
"""Severity level parsing shared by loggers, handlers and processors."""

from __future__ import annotations

import logging

LEVEL_NAMES: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "NOTICE": logging.INFO + 5,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "ALERT": logging.CRITICAL + 5,
    "EMERGENCY": logging.CRITICAL + 10,
}

# NOTICE/ALERT/EMERGENCY have no stdlib counterpart; give them display names.
for _name in ("NOTICE", "ALERT", "EMERGENCY"):
    logging.addLevelName(LEVEL_NAMES[_name], _name)


def parse_level(level: int | str) -> int:
    """Convert a level name or number to its numeric value.

    Raises:
        ValueError: If the name is unknown or the value has the wrong type.
    """
    if isinstance(level, bool):
        raise ValueError(f"Invalid level: {level!r}")
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = LEVEL_NAMES.get(level.strip().upper())
        if value is None:
            raise ValueError(f"Invalid level string: {level!r}")
        return value
    raise ValueError(f"Invalid level type: {type(level).__name__}")
