# src/factory/registry.py — v1
"""Component registry mapping string keys to typed builders.

Configuration names components by key (``{"class": "json"}``) instead of
by import path. Each builder validates its own parameter map with a
pydantic model before constructing the component.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from mellivora_logger.config.settings import ConfigurationError
from mellivora_logger.processors.timing import TimingStore

logger = logging.getLogger(__name__)

KINDS: tuple[str, ...] = ("handler", "formatter", "processor")

P = TypeVar("P", bound=BaseModel)


class RegistryError(ConfigurationError):
    """Raised when a component key is unknown or its spec is malformed."""


@dataclass
class BuildContext:
    """Shared state handed to every builder of one factory."""

    timing_store: TimingStore = field(default_factory=TimingStore)
    root_path: str | None = None


Builder = Callable[[Mapping[str, Any], BuildContext], Any]


def typed_builder(
    model: type[P], construct: Callable[[P, BuildContext], Any]
) -> Builder:
    """Wrap ``construct`` so that params are validated against ``model`` first."""

    def build(params: Mapping[str, Any], context: BuildContext) -> Any:
        try:
            validated = model.model_validate(dict(params))
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid parameters for {model.__name__}: {exc}"
            ) from exc
        return construct(validated, context)

    return build


class ComponentRegistry:
    """Registry of handler, formatter and processor builders."""

    def __init__(self) -> None:
        self._builders: dict[str, dict[str, Builder]] = {kind: {} for kind in KINDS}

    def register(self, kind: str, key: str, builder: Builder) -> None:
        """Register ``builder`` under ``key`` for a component kind."""
        builders = self._kind(kind)
        if key in builders:
            logger.warning("Overwriting existing %s builder: %s", kind, key)
        builders[key] = builder

    def keys(self, kind: str) -> list[str]:
        """Return sorted keys registered for ``kind``."""
        return sorted(self._kind(kind))

    def get(self, kind: str, key: str) -> Builder | None:
        return self._kind(kind).get(key)

    def get_or_raise(self, kind: str, key: str) -> Builder:
        builder = self.get(kind, key)
        if builder is None:
            raise RegistryError(f"Unknown {kind} '{key}'")
        return builder

    def build(
        self, kind: str, spec: Mapping[str, Any], context: BuildContext | None = None
    ) -> Any:
        """Instantiate a component from ``{"class": key, "params": {...}}``."""
        key = spec.get("class")
        if not key:
            raise RegistryError("Missing the 'class' parameter")
        params = spec.get("params") or {}
        if not isinstance(params, Mapping):
            raise RegistryError(f"Parameters of {kind} '{key}' must be a mapping")
        builder = self.get_or_raise(kind, key)
        return builder(params, context or BuildContext())

    def _kind(self, kind: str) -> dict[str, Builder]:
        if kind not in self._builders:
            raise RegistryError(f"Unknown component kind '{kind}'")
        return self._builders[kind]
