# src/processors/context.py — v1
"""Request context for web processors.

A web application stores the current request's environ (and parsed form
data) here; ``WebProcessor`` reads it back when a record is logged during
that request.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

_request: contextvars.ContextVar[RequestContext | None] = contextvars.ContextVar(
    "request", default=None
)


@dataclass(frozen=True)
class RequestContext:
    """Snapshot of the request being served."""

    environ: Mapping[str, Any] = field(default_factory=dict)
    post: Mapping[str, Any] = field(default_factory=dict)


def get_request_context() -> RequestContext | None:
    """Return the current request context, or None outside a request."""
    return _request.get()


def set_request_context(
    environ: Mapping[str, Any], post: Mapping[str, Any] | None = None
) -> contextvars.Token:
    """Set the request context (called once per request)."""
    return _request.set(RequestContext(environ=dict(environ), post=dict(post or {})))


def clear_request_context(token: contextvars.Token | None = None) -> None:
    """Reset the request context."""
    if token is not None:
        _request.reset(token)
    else:
        _request.set(None)


class RequestContextMiddleware:
    """WSGI middleware that exposes each request's environ to processors."""

    def __init__(self, app: Callable[..., Iterable[bytes]]) -> None:
        self.app = app

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        token = set_request_context(environ)
        try:
            return self.app(environ, start_response)
        finally:
            clear_request_context(token)
