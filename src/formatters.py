# src/formatters.py — v1
"""Line and JSON formatters aware of record context and extra maps."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from mellivora_logger.core.records import get_context, get_extra

DEFAULT_LINE_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s] %(message)s %(context)s %(extra)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _dump(data: dict[str, Any]) -> str:
    return json.dumps(data, default=str, ensure_ascii=False) if data else ""


class LineFormatter(logging.Formatter):
    """Human-readable single-line formatter.

    The ``%(context)s`` and ``%(extra)s`` placeholders render the record's
    maps as compact JSON, or as an empty string when the map is empty.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        strip_trailing: bool = True,
    ) -> None:
        super().__init__(fmt=fmt or DEFAULT_LINE_FORMAT, datefmt=datefmt or DEFAULT_DATE_FORMAT)
        self.strip_trailing = strip_trailing

    def format(self, record: logging.LogRecord) -> str:
        context = get_context(record)
        extra = get_extra(record)
        # Render into copies so the record keeps its dicts for later handlers.
        saved = (record.context, record.extra)
        record.context, record.extra = _dump(context), _dump(extra)
        try:
            line = super().format(record)
        finally:
            record.context, record.extra = saved
        return line.rstrip() if self.strip_trailing else line


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter, one object per line."""

    def __init__(self, include_extra: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "channel": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "context": get_context(record),
        }
        if self.include_extra:
            log_entry["extra"] = get_extra(record)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)
