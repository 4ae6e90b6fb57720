# src/processors/script.py — v1
"""Process information processor."""

from __future__ import annotations

import logging
import os
import shlex
import sys
from typing import Any

from mellivora_logger.processors.base import BaseProcessor


class ScriptProcessor(BaseProcessor):
    """Adds ``pid``, ``script`` (interpreter path) and ``command`` (argv)."""

    def process(self, record: logging.LogRecord, extra: dict[str, Any]) -> None:
        extra["pid"] = os.getpid()
        extra["script"] = sys.executable
        argv = getattr(sys, "orig_argv", None) or sys.argv
        extra["command"] = shlex.join(argv)
