"""structlog wiring for the cursor engine.

Engine code logs through ``record_event`` and ``span``. ``configure`` decides
where those lines go; it runs once on import with the ``CARET_ENGINE_*``
environment and again whenever a host wants different output.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import structlog

ENV_PREFIX = "CARET_ENGINE_"
LOGGER_NAME = "caret_engine"
LEVELS = ("debug", "info", "warning", "error", "critical")

_installed_handlers: list[logging.Handler] = []


def _env(name: str) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str) -> bool:
    raw = _env(name)
    return raw is not None and raw.lower() in {"1", "true", "yes", "on"}


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level '{level}'")
    return number


def configure(
    *,
    level: str | None = None,
    log_json: bool | None = None,
    log_file: str | None = None,
    console: bool | None = None,
) -> None:
    """Route the ``caret_engine`` logger through structlog.

    Arguments left as ``None`` come from ``CARET_ENGINE_LOG_LEVEL``
    (default ``WARNING``), ``CARET_ENGINE_LOG_JSON``, ``CARET_ENGINE_LOG_FILE``
    and ``CARET_ENGINE_DISABLE_CONSOLE``. Calling it again replaces the
    handlers installed by the previous call.
    """

    threshold = _level_number(level or _env("LOG_LEVEL") or "WARNING")
    as_json = _env_flag("LOG_JSON") if log_json is None else log_json
    target_file = _env("LOG_FILE") if log_file is None else log_file
    to_console = not _env_flag("DISABLE_CONSOLE") if console is None else console

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if as_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        colors = sys.stderr.isatty() and not _env_flag("NO_COLOR")
        renderer = structlog.dev.ConsoleRenderer(colors=colors)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = []
    if target_file:
        handlers.append(logging.FileHandler(target_file, encoding="utf-8"))
    if to_console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if not handlers:
        handlers.append(logging.NullHandler())

    engine_logger = logging.getLogger(LOGGER_NAME)
    for handler in _installed_handlers:
        engine_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        engine_logger.addHandler(handler)
        _installed_handlers.append(handler)
    engine_logger.setLevel(threshold)
    # Our handlers are the only sink; the root logger may belong to the host.
    engine_logger.propagate = False


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name or LOGGER_NAME)


def _method(log: Any, level: str) -> Any:
    name = level.lower()
    if name not in LEVELS:
        raise ValueError(f"Unsupported log level '{level}'")
    return getattr(log, name)


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: dict[str, Any] | None = None,
    logger_name: str | None = None,
) -> None:
    """Log ``name`` as the event with ``data`` as structured fields."""

    method = _method(get_logger(logger_name), level)
    method(name, **{key: _plain(value) for key, value in (data or {}).items()})


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects fields for the closing log line."""

    logger: Any
    name: str
    component: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)

    @property
    def duration_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 3)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _plain(value)

    def _fields(self) -> dict[str, Any]:
        fields = {"span": self.name, "duration_ms": self.duration_ms}
        if self.component:
            fields["component"] = self.component
        fields.update(self.metadata)
        return fields

    def complete(self) -> None:
        self.logger.debug("span.complete", **self._fields())

    def fail(self, reason: str) -> None:
        self.logger.error("span.fail", reason=reason, **self._fields())


@contextmanager
def span(
    name: str,
    *,
    logger_name: str | None = None,
    component: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Iterator[SpanHandle]:
    """Time a block and log ``span.complete`` or ``span.fail`` when it ends.

    ``metadata`` is bound as context for the duration of the block, so any
    event logged inside carries it too.
    """

    context = {key: _plain(value) for key, value in (metadata or {}).items()}
    handle = SpanHandle(logger=get_logger(logger_name), name=name, component=component)
    with structlog.contextvars.bound_contextvars(**context):
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        handle.complete()


configure()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
