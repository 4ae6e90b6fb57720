# src/logger.py — v1
"""Channel logger: a ``logging.Logger`` with a bubble-aware handler stack.

Channel loggers are built by ``LoggerFactory`` and live outside the
``logging.getLogger`` hierarchy, so they never propagate to the root
logger. Records they build always carry ``context`` and ``extra`` dicts.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Iterable, Mapping

from mellivora_logger.core.levels import parse_level
from mellivora_logger.handlers.base import ChannelHandler

# (level, message, context) -> allow?
FilterCallback = Callable[[int, str, Mapping[str, Any]], bool]


class ChannelLogger(logging.Logger):
    """Logger for one channel with filters, level control and exception logging."""

    def __init__(
        self,
        name: str,
        handlers: Iterable[logging.Handler] = (),
        processors: Iterable[logging.Filter] = (),
        level: int | str = logging.DEBUG,
    ) -> None:
        super().__init__(name, parse_level(level))
        self.propagate = False
        self._callbacks: list[FilterCallback] = []
        for handler in handlers:
            self.addHandler(handler)
        for processor in processors:
            self.addFilter(processor)

    def __str__(self) -> str:
        return f"Logger({self.name})"

    # --- Level ---

    def setLevel(self, level: int | str) -> None:
        super().setLevel(level)
        # Not registered with the logging manager, so its cache is ours to clear.
        self._cache.clear()

    def set_level(self, level: int | str) -> ChannelLogger:
        """Set the minimum level; accepts level names or numbers."""
        self.setLevel(parse_level(level))
        return self

    def get_level(self) -> int:
        return self.level

    # --- Handlers ---

    def push_handler(self, handler: logging.Handler) -> ChannelLogger:
        self.addHandler(handler)
        return self

    def get_handler(self, cls: type[logging.Handler]) -> logging.Handler | None:
        """First handler that is an instance of ``cls``, or None."""
        for handler in self.handlers:
            if isinstance(handler, cls):
                return handler
        return None

    def remove_handler(self, cls: type[logging.Handler]) -> bool:
        """Remove the first handler that is an instance of ``cls``."""
        handler = self.get_handler(cls)
        if handler is None:
            return False
        self.removeHandler(handler)
        return True

    def callHandlers(self, record: logging.LogRecord) -> None:
        """Offer the record to each handler in order until one stops it.

        A failing handler reports through its ``handleError`` and the
        remaining handlers still run.
        """
        for handler in self.handlers:
            if record.levelno < handler.level:
                continue
            try:
                stop = handler.handle(record)
            except Exception:
                handler.handleError(record)
                continue
            if isinstance(handler, ChannelHandler) and stop is True:
                break

    # --- Filters ---

    @property
    def callbacks(self) -> list[FilterCallback]:
        return list(self._callbacks)

    def push_filter(self, callback: FilterCallback) -> ChannelLogger:
        """Add a filter callback; the most recently pushed runs first."""
        if not callable(callback):
            raise TypeError(
                f"Filters must be callables taking (level, message, context), got {callback!r}"
            )
        self._callbacks.insert(0, callback)
        return self

    def pop_filter(self) -> FilterCallback:
        if not self._callbacks:
            raise IndexError("You tried to pop from an empty filter stack.")
        return self._callbacks.pop(0)

    # --- Records ---

    def _log(  # type: ignore[override]
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: Mapping[str, Any] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        context = dict(context or {})
        for callback in self._callbacks:
            if not callback(level, str(msg), context):
                return

        merged = dict(extra or {})
        merged.setdefault("context", context)
        merged.setdefault("extra", {})
        # One extra frame (this method) sits between the caller and logging.
        super()._log(level, msg, args, exc_info, merged, stack_info, stacklevel + 1)

    def add_exception(self, exc: BaseException, level: int | str = logging.ERROR) -> None:
        """Log an exception with its type, message, location and traceback."""
        frames = traceback.extract_tb(exc.__traceback__)
        last = frames[-1] if frames else None
        context = {
            "exception": f"{type(exc).__module__}.{type(exc).__qualname__}",
            "code": getattr(exc, "code", getattr(exc, "errno", 0)),
            "message": str(exc),
            "file": last.filename if last else "",
            "line": last.lineno if last else 0,
            "trace": "".join(traceback.format_exception(exc)),
        }
        self.log(parse_level(level), str(exc), context=context, stacklevel=2)
