# src/handlers/named_rotating.py — v1
"""Per-channel, per-date rotating file handler.

Each record goes to the file obtained by substituting the record's
channel and today's date into the filename template, e.g. with the
template ``logs/%channel%.%date%.log`` a record on channel ``order``
lands in ``logs/order.2024-01-01.log``.

Records are written immediately, or buffered per channel and written in
FIFO order once a channel holds more than ``buffer_size`` records. After
every physical write the active file is measured and rotated into
numbered backups when it has reached ``max_bytes``.

``logging.shutdown()`` flushes and closes every live handler at
interpreter exit, so buffered records are not lost on a normal exit.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from datetime import datetime
from typing import BinaryIO, Callable

from mellivora_logger.config.settings import ConfigurationError
from mellivora_logger.handlers.base import ChannelHandler
from mellivora_logger.handlers.rotation import RotationManager
from mellivora_logger.handlers.router import DEFAULT_DATE_FORMAT, ChannelFileRouter


class NamedRotatingFileHandler(ChannelHandler):
    """Write each channel to its own dated file with size-based rotation."""

    terminator = "\n"

    def __init__(
        self,
        filename: str,
        max_bytes: int = 100_000_000,
        backup_count: int = 10,
        buffer_size: int = 0,
        date_format: str = DEFAULT_DATE_FORMAT,
        level: int | str = logging.DEBUG,
        bubble: bool = True,
        file_permission: int | None = None,
        use_locking: bool = False,
        encoding: str = "utf-8",
        root_path: str | os.PathLike | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            filename: Template with optional ``%date%``/``%channel%`` tokens.
                Relative templates are anchored at the project root.
            max_bytes: Size at which the active file rotates (0 = never).
            backup_count: Backups to keep (0 = keep none, rotation truncates).
            buffer_size: Records held per channel before a flush (0 = none).
            date_format: ``strftime`` pattern for ``%date%``.
            level: Minimum level handled.
            bubble: Whether records continue to the next handler.
            file_permission: Mode applied to newly created log files.
            use_locking: Take an exclusive ``flock`` around each write.
            encoding: Text encoding of formatted records.
            root_path: Root for relative templates (default: project root).
            clock: Source of the current date (default: ``datetime.now``).
        """
        for name, value in (
            ("max_bytes", max_bytes),
            ("backup_count", backup_count),
            ("buffer_size", buffer_size),
        ):
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")

        super().__init__(level=level, bubble=bubble)
        self.router = ChannelFileRouter(filename, date_format, root_path, clock)
        self.rotation = RotationManager(max_bytes, backup_count)
        self.buffer_size = buffer_size
        self.file_permission = file_permission
        self.use_locking = use_locking
        self.encoding = encoding

        self._streams: dict[str, BinaryIO] = {}
        self._streams_date: str | None = None
        self._buffers: dict[str, deque[tuple[logging.LogRecord, str]]] = {}
        self._current: tuple[str, str] | None = None
        self._url: str | None = None
        self._stream: BinaryIO | None = None

    @property
    def filename(self) -> str:
        """The anchored filename template."""
        return self.router.template

    @property
    def max_bytes(self) -> int:
        return self.rotation.max_bytes

    @property
    def backup_count(self) -> int:
        return self.rotation.backup_count

    @property
    def date_format(self) -> str:
        return self.router.date_format

    @property
    def streams(self) -> dict[str, BinaryIO]:
        """Snapshot of the open stream cache, keyed by resolved path."""
        return dict(self._streams)

    def buffered(self, channel: str | None = None) -> int:
        """Number of records waiting in one channel's buffer, or in all."""
        if channel is not None:
            return len(self._buffers.get(channel, ()))
        return sum(len(pending) for pending in self._buffers.values())

    def get_filename(self, channel: str = "") -> str:
        """Path currently in effect for ``channel``."""
        return self.router.resolve(channel)

    def emit(self, record: logging.LogRecord) -> None:
        formatted = self.format(record)
        channel = record.name

        if not self.buffer_size:
            self._write(channel, formatted)
            return

        pending = self._buffers.setdefault(channel, deque())
        pending.append((record, formatted))
        if len(pending) > self.buffer_size:
            self._flush_channel(channel)

    def flush(self, channel: str | None = None) -> None:  # type: ignore[override]
        """Write buffered records for one channel, or for every channel.

        Raises:
            OSError: If a write fails. Records not yet written stay queued.
        """
        self.acquire()
        try:
            if channel is None:
                for name in list(self._buffers):
                    self._flush_channel(name)
            else:
                self._flush_channel(channel)
        finally:
            self.release()

    def close(self) -> None:
        """Flush every buffer, then close and forget every open stream."""
        self.acquire()
        try:
            try:
                self.flush()
            finally:
                # Whatever a failed flush left behind is dropped, so a
                # second close is a no-op.
                self._buffers.clear()
                self._close_streams()
        finally:
            self.release()
            super().close()

    def _flush_channel(self, channel: str) -> None:
        pending = self._buffers.get(channel)
        while pending:
            _, formatted = pending[0]
            self._write(channel, formatted)
            pending.popleft()

    def _write(self, channel: str, formatted: str) -> None:
        date = self.router.current_date()
        if date != self._streams_date:
            # Day rollover: files of the previous date are no longer written.
            self._close_streams()
            self._streams_date = date

        if self._stream is None or self._current != (channel, date):
            self._url = self.router.resolve(channel, date)
            self._stream = self._streams.get(self._url)

        if self._stream is None:
            self._stream = self._open(self._url)
            self._streams[self._url] = self._stream
        self._current = (channel, date)

        payload = (formatted + self.terminator).encode(self.encoding)
        self._write_payload(self._stream, payload)

        if self.rotation.should_rotate(self._stream):
            self._rotate()

    def _close_streams(self) -> None:
        for stream in self._streams.values():
            stream.close()
        self._streams.clear()
        self._stream = None
        self._url = None
        self._current = None

    def _open(self, path: str) -> BinaryIO:
        created = not os.path.exists(path)
        stream = open(path, "ab")
        if created and self.file_permission is not None:
            os.chmod(path, self.file_permission)
        return stream

    def _write_payload(self, stream: BinaryIO, payload: bytes) -> None:
        if not self.use_locking:
            stream.write(payload)
            stream.flush()
            return

        import fcntl

        fcntl.flock(stream.fileno(), fcntl.LOCK_EX)
        try:
            stream.write(payload)
            stream.flush()
        finally:
            fcntl.flock(stream.fileno(), fcntl.LOCK_UN)

    def _rotate(self) -> None:
        stream, path = self._stream, self._url
        self._stream = None
        self._current = None
        if path is not None:
            self._streams.pop(path, None)
        if stream is not None:
            stream.close()
        if path is not None:
            self.rotation.rotate(path)

    def __repr__(self) -> str:
        level = logging.getLevelName(self.level)
        return f"<{self.__class__.__name__} {self.filename} ({level})>"
