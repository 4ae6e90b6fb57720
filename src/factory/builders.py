# src/factory/builders.py — v1
"""Built-in component builders and their parameter models."""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mellivora_logger.core.levels import parse_level
from mellivora_logger.factory.registry import BuildContext, ComponentRegistry, typed_builder
from mellivora_logger.formatters import JsonFormatter, LineFormatter
from mellivora_logger.handlers.named_rotating import NamedRotatingFileHandler
from mellivora_logger.handlers.router import DEFAULT_DATE_FORMAT, anchor_template
from mellivora_logger.processors.introspection import IntrospectionProcessor
from mellivora_logger.processors.memory import MemoryProcessor, ProfilerProcessor
from mellivora_logger.processors.script import ScriptProcessor
from mellivora_logger.processors.timing import CostTimeProcessor
from mellivora_logger.processors.web import DEFAULT_SERVER_KEYS, WebProcessor


class _Params(BaseModel):
    model_config = ConfigDict(extra="forbid")


class _LeveledParams(_Params):
    level: int = logging.DEBUG

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> int:
        return parse_level(v)


# === HANDLERS ===


class NamedRotatingFileParams(_LeveledParams):
    filename: str = Field(min_length=1)
    max_bytes: int = Field(default=100_000_000, ge=0)
    backup_count: int = Field(default=10, ge=0)
    buffer_size: int = Field(default=0, ge=0)
    date_format: str = DEFAULT_DATE_FORMAT
    bubble: bool = True
    file_permission: int | None = None
    use_locking: bool = False
    encoding: str = "utf-8"


class StreamParams(_LeveledParams):
    stream: Literal["stdout", "stderr"] = "stderr"


class FileParams(_LeveledParams):
    filename: str = Field(min_length=1)
    mode: Literal["a", "w"] = "a"
    encoding: str = "utf-8"


class NullParams(_LeveledParams):
    pass


def _named_rotating_file(p: NamedRotatingFileParams, ctx: BuildContext) -> NamedRotatingFileHandler:
    return NamedRotatingFileHandler(
        filename=p.filename,
        max_bytes=p.max_bytes,
        backup_count=p.backup_count,
        buffer_size=p.buffer_size,
        date_format=p.date_format,
        level=p.level,
        bubble=p.bubble,
        file_permission=p.file_permission,
        use_locking=p.use_locking,
        encoding=p.encoding,
        root_path=ctx.root_path,
    )


def _stream(p: StreamParams, ctx: BuildContext) -> logging.StreamHandler:
    handler = logging.StreamHandler(sys.stdout if p.stream == "stdout" else sys.stderr)
    handler.setLevel(p.level)
    return handler


def _file(p: FileParams, ctx: BuildContext) -> logging.FileHandler:
    handler = logging.FileHandler(
        anchor_template(p.filename, ctx.root_path),
        mode=p.mode,
        encoding=p.encoding,
        delay=True,
    )
    handler.setLevel(p.level)
    return handler


def _null(p: NullParams, ctx: BuildContext) -> logging.NullHandler:
    handler = logging.NullHandler()
    handler.setLevel(p.level)
    return handler


# === FORMATTERS ===


class LineFormatterParams(_Params):
    fmt: str | None = None
    datefmt: str | None = None


class JsonFormatterParams(_Params):
    include_extra: bool = True


def _line(p: LineFormatterParams, ctx: BuildContext) -> LineFormatter:
    return LineFormatter(fmt=p.fmt, datefmt=p.datefmt)


def _json(p: JsonFormatterParams, ctx: BuildContext) -> JsonFormatter:
    return JsonFormatter(include_extra=p.include_extra)


# === PROCESSORS ===


class ProcessorParams(_LeveledParams):
    pass


class MemoryParams(_LeveledParams):
    real_usage: bool = True
    use_formatting: bool = True


class WebParams(_LeveledParams):
    server_keys: list[str] = Field(default_factory=lambda: list(DEFAULT_SERVER_KEYS))
    server_data: dict[str, Any] = Field(default_factory=dict)
    post_data: dict[str, Any] = Field(default_factory=dict)


def register_builtins(registry: ComponentRegistry) -> ComponentRegistry:
    """Register every built-in handler, formatter and processor."""
    registry.register(
        "handler", "named_rotating_file", typed_builder(NamedRotatingFileParams, _named_rotating_file)
    )
    registry.register("handler", "stream", typed_builder(StreamParams, _stream))
    registry.register("handler", "file", typed_builder(FileParams, _file))
    registry.register("handler", "null", typed_builder(NullParams, _null))

    registry.register("formatter", "line", typed_builder(LineFormatterParams, _line))
    registry.register("formatter", "json", typed_builder(JsonFormatterParams, _json))

    registry.register(
        "processor",
        "cost_time",
        typed_builder(ProcessorParams, lambda p, ctx: CostTimeProcessor(p.level, ctx.timing_store)),
    )
    registry.register(
        "processor",
        "profiler",
        typed_builder(ProcessorParams, lambda p, ctx: ProfilerProcessor(p.level, ctx.timing_store)),
    )
    registry.register(
        "processor",
        "memory",
        typed_builder(
            MemoryParams,
            lambda p, ctx: MemoryProcessor(p.level, p.real_usage, p.use_formatting),
        ),
    )
    registry.register(
        "processor", "script", typed_builder(ProcessorParams, lambda p, ctx: ScriptProcessor(p.level))
    )
    registry.register(
        "processor",
        "introspection",
        typed_builder(ProcessorParams, lambda p, ctx: IntrospectionProcessor(p.level)),
    )
    registry.register(
        "processor",
        "web",
        typed_builder(
            WebParams,
            lambda p, ctx: WebProcessor(p.level, p.server_keys, p.server_data, p.post_data),
        ),
    )
    return registry


def default_registry() -> ComponentRegistry:
    """A fresh registry holding the built-in components."""
    return register_builtins(ComponentRegistry())
