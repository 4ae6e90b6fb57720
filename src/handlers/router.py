# src/handlers/router.py — v1
"""Resolve a filename template into the concrete log path for a channel.

Templates may contain ``%date%`` (rendered with ``strftime``) and
``%channel%``. Relative templates are anchored at the project root.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Callable

from mellivora_logger.config.paths import get_root_path
from mellivora_logger.config.settings import ConfigurationError

DATE_TOKEN = "%date%"
CHANNEL_TOKEN = "%channel%"
FILE_SCHEME = "file://"
DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def sanitize_channel(channel: str) -> str:
    """Make a channel name safe to embed in a single path component."""
    unsafe = {"/", "\\", "\0", os.sep}
    if os.altsep:
        unsafe.add(os.altsep)
    safe = "".join("_" if ch in unsafe else ch for ch in channel)
    if safe and set(safe) == {"."}:
        safe = "_" * len(safe)
    return safe


def anchor_template(template: str, root_path: str | os.PathLike | None = None) -> str:
    """Return the template joined to the root directory when it is relative."""
    if template.startswith(FILE_SCHEME):
        return template[len(FILE_SCHEME):]
    if os.path.isabs(template):
        return template
    root = root_path if root_path is not None else get_root_path()
    if not root:
        return template
    return f"{str(root).rstrip('/')}/{template}"


class ChannelFileRouter:
    """Maps (channel, current date) to an absolute log file path."""

    def __init__(
        self,
        template: str,
        date_format: str = DEFAULT_DATE_FORMAT,
        root_path: str | os.PathLike | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not template:
            raise ConfigurationError("Log filename template must not be empty")
        self._template = anchor_template(template, root_path)
        self._date_format = date_format
        self._clock = clock or datetime.now
        self._ready_dirs: set[str] = set()

    @property
    def template(self) -> str:
        return self._template

    @property
    def date_format(self) -> str:
        return self._date_format

    def current_date(self) -> str:
        """Today's date rendered with the configured format."""
        return self._clock().strftime(self._date_format)

    def render(self, channel: str, date: str | None = None) -> str:
        """Substitute tokens without touching the filesystem."""
        if date is None:
            date = self.current_date()
        return self._template.replace(DATE_TOKEN, date).replace(
            CHANNEL_TOKEN, sanitize_channel(channel)
        )

    def resolve(self, channel: str = "", date: str | None = None) -> str:
        """Render the path and make sure its directory exists and is writable.

        Raises:
            ConfigurationError: If the directory cannot be created or written.
        """
        path = self.render(channel, date)
        self.ensure_directory(path)
        return path

    def ensure_directory(self, path: str) -> None:
        directory = os.path.dirname(path) or "."
        if directory in self._ready_dirs:
            return
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(
                f"Unable to create the log path: {directory}"
            ) from exc
        if not os.access(directory, os.W_OK):
            raise ConfigurationError(f"Unable to write to the log path: {directory}")
        self._ready_dirs.add(directory)
