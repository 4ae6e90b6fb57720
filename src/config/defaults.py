# src/config/defaults.py — v1
"""Stock logger configuration.

Formatters render the final line, processors append metadata to
``record.extra``, handlers decide where lines go, and loggers map channel
names to handler chains. Channels missing from ``loggers`` fall back to
the default channel.
"""

from __future__ import annotations

from typing import Any

FORMATTERS: dict[str, dict[str, Any]] = {
    "simple": {
        "class": "line",
        "params": {"fmt": "[%(asctime)s][%(levelname)s] %(message)s %(context)s"},
    },
    "verbose": {
        "class": "line",
        "params": {
            "fmt": "[%(asctime)s][%(name)s][%(levelname)s] %(message)s %(context)s %(extra)s",
        },
    },
    # One JSON object per line, convenient for log shippers
    "json": {"class": "json"},
}

PROCESSORS: dict[str, dict[str, Any]] = {
    "intro": {"class": "introspection", "params": {"level": "ERROR"}},
    "web": {"class": "web", "params": {"level": "ERROR"}},
    "script": {"class": "script", "params": {"level": "ERROR"}},
    "cost": {"class": "cost_time", "params": {"level": "DEBUG"}},
    "memory": {"class": "memory", "params": {"level": "ERROR"}},
}

HANDLERS: dict[str, dict[str, Any]] = {
    "file": {
        "class": "named_rotating_file",
        "params": {
            "filename": "logs/%channel%.%date%.log",
            "max_bytes": 100_000_000,
            "backup_count": 10,
            "buffer_size": 10,
            "date_format": "%Y-%m-%d",
            "level": "INFO",
        },
        "formatter": "json",
        "processors": ["intro", "web", "script", "cost", "memory"],
    },
    "cli": {
        "class": "stream",
        "params": {"stream": "stdout", "level": "DEBUG"},
        "formatter": "simple",
        "processors": ["intro", "script", "cost", "memory"],
    },
}

LOGGERS: dict[str, list[str]] = {
    "default": ["file"],
    "cli": ["cli", "file"],
    "exception": ["file"],
}

DEFAULT_CONFIG: dict[str, Any] = {
    "formatters": FORMATTERS,
    "processors": PROCESSORS,
    "handlers": HANDLERS,
    "loggers": LOGGERS,
    "default": "default",
}
