# src/factory/logger_factory.py — v1
"""Build channel loggers from a declarative configuration mapping.

Configuration keys:
    formatters: name -> {"class": key, "params": {...}}
    processors: name -> {"class": key, "params": {...}}
    handlers:   name -> {"class": key, "params": {...},
                         "formatter": name, "processors": [name, ...]}
    loggers:    channel -> [handler name, ...]
    default:    channel used when none (or an unknown one) is requested
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Sequence

from mellivora_logger.config.settings import ConfigurationError, Settings, load_settings
from mellivora_logger.factory.builders import default_registry
from mellivora_logger.factory.registry import BuildContext, ComponentRegistry
from mellivora_logger.logger import ChannelLogger
from mellivora_logger.processors.timing import TimingStore

logger = logging.getLogger(__name__)


class LoggerFactory:
    """Creates, caches and releases channel loggers."""

    def __init__(
        self,
        config: Mapping[str, Any] | None = None,
        registry: ComponentRegistry | None = None,
        timing_store: TimingStore | None = None,
        root_path: str | Path | None = None,
    ) -> None:
        config = config or {}
        self._formatters: dict[str, Mapping[str, Any]] = dict(config.get("formatters") or {})
        self._processors: dict[str, Mapping[str, Any]] = dict(config.get("processors") or {})
        self._handlers: dict[str, Mapping[str, Any]] = dict(config.get("handlers") or {})
        self._loggers: dict[str, Any] = dict(config.get("loggers") or {})
        self._registry = registry or default_registry()
        self._context = BuildContext(
            timing_store=timing_store or TimingStore(),
            root_path=str(root_path) if root_path is not None else None,
        )
        self._instances: dict[str, logging.Logger] = {}
        self._default: str | None = None

        if config.get("default"):
            self.set_default(config["default"])

    # --- Construction helpers ---

    @classmethod
    def build(cls, config: Mapping[str, Any], **kwargs: Any) -> LoggerFactory:
        return cls(config, **kwargs)

    @classmethod
    def build_with(cls, config_file: str | Path, **kwargs: Any) -> LoggerFactory:
        """Create a factory from a JSON configuration file.

        Raises:
            ConfigurationError: If the file is missing, not JSON, or not an object.
        """
        path = Path(config_file).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Config file not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigurationError(f"Only JSON configuration files are supported: {path}")
        try:
            config = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration file must contain an object: {path}")
        return cls(config, **kwargs)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> LoggerFactory:
        """Create a factory from the configured file, or the stock configuration."""
        from mellivora_logger.config.defaults import DEFAULT_CONFIG

        settings = settings or load_settings()
        kwargs.setdefault("root_path", settings.root_path)
        if settings.config_file is not None:
            factory = cls.build_with(settings.config_file, **kwargs)
        else:
            factory = cls(DEFAULT_CONFIG, **kwargs)
        if settings.default_channel:
            factory.set_default(settings.default_channel)
        return factory

    # --- Default channel ---

    @property
    def default(self) -> str:
        """Default channel: explicit, else the first configured one, else 'default'."""
        if self._default is None:
            self._default = next(iter(self._loggers), "default")
        return self._default

    def set_default(self, channel: str) -> LoggerFactory:
        if channel not in self._loggers:
            raise ConfigurationError(f"Call to undefined logger channel '{channel}'")
        self._default = channel
        return self

    @property
    def registry(self) -> ComponentRegistry:
        return self._registry

    @property
    def timing_store(self) -> TimingStore:
        return self._context.timing_store

    # --- Loggers ---

    def add(self, channel: str, channel_logger: logging.Logger) -> LoggerFactory:
        """Register a ready-made logger under ``channel``."""
        self._instances[channel] = channel_logger
        return self

    def get(self, channel: str | None = None) -> logging.Logger:
        """Return the logger for ``channel``, building it on first use.

        Unknown channels resolve to the default channel's logger.
        """
        if not channel:
            channel = self.default

        if channel not in self._instances:
            if channel not in self._loggers:
                logger.debug("Channel %r is not configured, using %r", channel, self.default)
                channel = self.default
            if channel not in self._instances:
                self._instances[channel] = self.make(channel, self._loggers.get(channel))

        return self._instances[channel]

    def make(self, channel: str, handlers: Sequence[str] | str | None = None) -> ChannelLogger:
        """Build a new logger for ``channel`` with the named handlers.

        A logger without handlers gets a ``NullHandler``.
        """
        channel_logger = ChannelLogger(channel)

        if not handlers:
            channel_logger.addHandler(logging.NullHandler())
            return channel_logger

        names = [handlers] if isinstance(handlers, str) else list(handlers)
        for name in names:
            option = self._handlers.get(name)
            if option is None:
                logger.warning("Skipping undefined handler %r for channel %r", name, channel)
                continue
            channel_logger.addHandler(self.make_handler(option))

        return channel_logger

    def make_handler(self, option: Mapping[str, Any]) -> logging.Handler:
        """Build one handler with its processors and formatter attached."""
        handler = self._registry.build("handler", option, self._context)

        for name in option.get("processors") or []:
            spec = self._processors.get(name)
            if spec is None:
                logger.debug("Skipping undefined processor %r", name)
                continue
            handler.addFilter(self._registry.build("processor", spec, self._context))

        formatter_name = option.get("formatter")
        if formatter_name:
            spec = self._formatters.get(formatter_name)
            if spec is None:
                logger.debug("Skipping undefined formatter %r", formatter_name)
            else:
                handler.setFormatter(self._registry.build("formatter", spec, self._context))

        return handler

    def exists(self, channel: str) -> bool:
        return channel in self._loggers or channel in self._instances

    def release(self) -> LoggerFactory:
        """Forget every cached logger without closing its handlers."""
        self._instances.clear()
        return self

    def close(self) -> None:
        """Close the handlers of every cached logger, then release them.

        Every handler is closed even when an earlier one fails; the first
        failure is re-raised afterwards.
        """
        seen: set[int] = set()
        first_error: Exception | None = None
        try:
            for channel_logger in self._instances.values():
                for handler in channel_logger.handlers:
                    if id(handler) in seen:
                        continue
                    seen.add(id(handler))
                    try:
                        handler.close()
                    except Exception as exc:
                        logger.warning("Failed to close handler %r: %s", handler, exc)
                        if first_error is None:
                            first_error = exc
        finally:
            self.release()
        if first_error is not None:
            raise first_error

    def __getitem__(self, channel: str) -> logging.Logger:
        return self.get(channel)

    def __setitem__(self, channel: str, channel_logger: logging.Logger) -> None:
        self.add(channel, channel_logger)

    def __contains__(self, channel: object) -> bool:
        return isinstance(channel, str) and self.exists(channel)
