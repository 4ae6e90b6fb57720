# src/facade.py — v1
"""Convenience helpers bound to one ``LoggerFactory``.

Usage:
    log = LogFacade(LoggerFactory.from_settings())
    log.info("order created", {"id": 42}, channel="order")
    log.exception(exc)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from mellivora_logger.core.levels import parse_level
from mellivora_logger.factory.logger_factory import LoggerFactory
from mellivora_logger.logger import ChannelLogger


class LogFacade:
    """Short-hand logging calls on an explicitly supplied factory."""

    def __init__(self, factory: LoggerFactory) -> None:
        self.factory = factory

    def logger(self, channel: str | None = None) -> logging.Logger:
        """Logger for ``channel`` (default channel when None)."""
        return self.factory.get(channel)

    def log(
        self, level: int | str, message: str, context: Mapping[str, Any] | None = None
    ) -> bool:
        """Log to the default channel."""
        return self.log_with(None, level, message, context)

    def log_with(
        self,
        channel: str | None,
        level: int | str,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> bool:
        """Log to ``channel``.

        Returns:
            True if the logger accepted the level, False otherwise.
        """
        target = self.logger(channel)
        levelno = parse_level(level)
        if not target.isEnabledFor(levelno):
            return False
        if isinstance(target, ChannelLogger):
            target.log(levelno, message, context=context, stacklevel=3)
        else:
            target.log(levelno, message, extra={"context": dict(context or {})}, stacklevel=3)
        return True

    def debug(self, message: str, context: Mapping[str, Any] | None = None, channel: str | None = None) -> bool:
        return self.log_with(channel, logging.DEBUG, message, context)

    def info(self, message: str, context: Mapping[str, Any] | None = None, channel: str | None = None) -> bool:
        return self.log_with(channel, logging.INFO, message, context)

    def warning(self, message: str, context: Mapping[str, Any] | None = None, channel: str | None = None) -> bool:
        return self.log_with(channel, logging.WARNING, message, context)

    def error(self, message: str, context: Mapping[str, Any] | None = None, channel: str | None = None) -> bool:
        return self.log_with(channel, logging.ERROR, message, context)

    def critical(self, message: str, context: Mapping[str, Any] | None = None, channel: str | None = None) -> bool:
        return self.log_with(channel, logging.CRITICAL, message, context)

    def exception(
        self,
        exc: BaseException,
        level: int | str = logging.ERROR,
        channel: str | None = None,
    ) -> bool:
        """Log an exception with its details in the record context."""
        target = self.logger(channel)
        levelno = parse_level(level)
        if not target.isEnabledFor(levelno):
            return False
        if isinstance(target, ChannelLogger):
            target.add_exception(exc, levelno)
        else:
            target.log(levelno, str(exc), exc_info=exc)
        return True
