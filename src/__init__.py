# src/__init__.py — v1
"""mellivora-logger: channel-based logging with per-channel rotating files."""

from mellivora_logger.facade import LogFacade
from mellivora_logger.factory.logger_factory import LoggerFactory
from mellivora_logger.handlers.named_rotating import NamedRotatingFileHandler
from mellivora_logger.logger import ChannelLogger
from mellivora_logger.version import __version__

__all__ = [
    "ChannelLogger",
    "LogFacade",
    "LoggerFactory",
    "NamedRotatingFileHandler",
    "__version__",
]
