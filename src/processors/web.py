# src/processors/web.py — v1
"""Web request processor."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from mellivora_logger.processors.base import BaseProcessor
from mellivora_logger.processors.context import get_request_context

DEFAULT_SERVER_KEYS: tuple[str, ...] = (
    "HTTP_USER_AGENT",
    "HTTP_HOST",
    "HTTP_REFERER",
    "REQUEST_URI",
    "REQUEST_METHOD",
    "REMOTE_ADDR",
)


class WebProcessor(BaseProcessor):
    """Adds selected request environ keys (lower-cased) and POST data.

    Explicit ``server_data``/``post_data`` take precedence over the current
    request context. Outside a request nothing is added.
    """

    def __init__(
        self,
        level: int | str = logging.DEBUG,
        server_keys: Sequence[str] = DEFAULT_SERVER_KEYS,
        server_data: Mapping[str, Any] | None = None,
        post_data: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(level)
        self.server_keys = tuple(server_keys)
        self.server_data = dict(server_data or {})
        self.post_data = dict(post_data or {})

    def process(self, record: logging.LogRecord, extra: dict[str, Any]) -> None:
        request = get_request_context()
        server = self.server_data or (dict(request.environ) if request else {})
        post = self.post_data or (dict(request.post) if request else {})

        for key in self.server_keys:
            if key in server:
                extra[key.lower()] = server[key]
        if post:
            extra["post"] = post
