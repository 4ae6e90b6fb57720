# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides record builders, a fixed clock, a recording handler and log
directories under ``tmp_path``. No network access, no global state leaks.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import pytest

from mellivora_logger.config.paths import reset_root_path
from mellivora_logger.handlers.base import ChannelHandler


class RecordingHandler(ChannelHandler):
    """Channel handler that keeps every emitted record in memory."""

    def __init__(self, level: int | str = logging.DEBUG, bubble: bool = True) -> None:
        super().__init__(level=level, bubble=bubble)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [r.getMessage() for r in self.records]


class FakeClock:
    """Mutable clock returning a fixed datetime."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# === FIXTURES: State isolation ===


@pytest.fixture(autouse=True)
def _isolated_root_path(monkeypatch: pytest.MonkeyPatch):
    """Each test starts with no configured root path."""
    monkeypatch.delenv("MELLIVORA_LOGGER_ROOT_PATH", raising=False)
    monkeypatch.delenv("MELLIVORA_LOGGER_CONFIG_FILE", raising=False)
    monkeypatch.delenv("MELLIVORA_LOGGER_DEFAULT_CHANNEL", raising=False)
    reset_root_path()
    yield
    reset_root_path()


# === FIXTURES: Records and clock ===


@pytest.fixture
def make_record() -> Callable[..., logging.LogRecord]:
    """Factory building records the way a channel logger does."""

    def _make(
        channel: str = "api",
        message: str = "hello",
        level: int = logging.INFO,
        context: dict[str, Any] | None = None,
    ) -> logging.LogRecord:
        record = logging.LogRecord(
            name=channel, level=level, pathname=__file__, lineno=1,
            msg=message, args=None, exc_info=None,
        )
        record.context = dict(context or {})
        record.extra = {}
        return record

    return _make


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at 2024-01-02 10:00."""
    return FakeClock(datetime(2024, 1, 2, 10, 0, 0))


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


# === FIXTURES: Temp dirs ===


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """Temporary log directory."""
    logs = tmp_path / "logs"
    logs.mkdir()
    return logs


@pytest.fixture
def recording_handler_cls() -> type[RecordingHandler]:
    """The recording handler class, for tests needing several instances."""
    return RecordingHandler
