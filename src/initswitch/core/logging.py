"""Structured logging infrastructure for initswitch.

Provides structured logging using structlog with service-specific context
(job name, operation, provider). Supports console output, JSON output, and a
rotating log file.

Example usage:
    from initswitch.core.logging import get_logger, configure_logging, with_context

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("upstart")

    # Log with key/value context
    logger.info("job_enabled", job="ssh", tier="post_b")

    # Correlate every event emitted while handling one operation
    ctx = ServiceContext(job="ssh", operation="enable")
    with with_context(ctx):
        logger.debug("override_written")  # Includes job and operation
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Field names whose values are never written to the log
SENSITIVE_PATTERNS = frozenset({
    "password",
    "passwd",
    "secret",
    "token",
    "credential",
    "api_key",
})


@dataclass(frozen=True)
class ServiceContext:
    """Immutable context attached to every log entry of one service operation.

    Attributes:
        job: Name of the job/service being operated on.
        operation: Public operation name (e.g. "enable", "reload").
        provider: Engine handling the call ("compat", "upstart", "sysvinit").
        request_id: Correlation ID, unique per top-level call.
    """

    job: str
    operation: str
    provider: str = "compat"
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    def with_provider(self, provider: str) -> ServiceContext:
        """Return a copy of this context handed down to another engine."""
        return ServiceContext(
            job=self.job,
            operation=self.operation,
            provider=provider,
            request_id=self.request_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "job": self.job,
            "operation": self.operation,
            "provider": self.provider,
            "request_id": self.request_id,
        }


_current_context: ContextVar[ServiceContext | None] = ContextVar(
    "initswitch_context", default=None
)


def get_current_context() -> ServiceContext | None:
    """Get the active ServiceContext, or None outside a ``with_context`` block."""
    return _current_context.get()


@contextmanager
def with_context(ctx: ServiceContext) -> Iterator[ServiceContext]:
    """Install ``ctx`` for the duration of a block.

    Nested blocks shadow the outer context and restore it on exit.
    """
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def _sanitize_value(key: str, value: Any) -> Any:
    key_lower = key.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in key_lower:
            return "[REDACTED]"
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that redacts sensitive fields (one level deep)."""
    sanitized: EventDict = {}
    for key, value in event_dict.items():
        if isinstance(value, dict):
            sanitized[key] = {k: _sanitize_value(k, v) for k, v in value.items()}
        else:
            sanitized[key] = _sanitize_value(key, value)
    return sanitized


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def _add_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that merges the active ServiceContext.

    Explicitly passed keys take precedence over context fields.
    """
    ctx = get_current_context()
    if ctx is not None:
        for key, value in ctx.to_dict().items():
            if key not in event_dict:
                event_dict[key] = value
    return event_dict


class ServiceLogger:
    """Component-bound logger wrapper around structlog.

    The underlying structlog logger is fetched on every call so that loggers
    created at import time honour a later ``configure_logging()``.
    """

    def __init__(self, component: str, **initial_context: Any) -> None:
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)


def _build_processors(renderer: Processor, include_timestamps: bool) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
        _add_context,
    ]
    if include_timestamps:
        processors.append(_add_timestamp)
    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ])
    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING",
    format: Literal["json", "console", "both"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 10,
    backup_count: int = 3,
    include_timestamps: bool = True,
) -> None:
    """Configure initswitch structured logging.

    Should be called once at startup, before any logging occurs.

    Args:
        level: Minimum log level to capture.
        format: "console" for human-readable stderr output, "json" for JSON
            (to ``file_path`` when given, stdout otherwise), "both" for console
            rendering on stderr and into a rotating ``file_path``.
        file_path: Log file path. Required when format="both".
        max_file_size_mb: Size at which the log file is rotated.
        backup_count: Number of rotated log files to keep.
        include_timestamps: Whether to add ISO8601 UTC timestamps.

    Raises:
        ValueError: If format="both" but file_path is not provided.
    """
    if format == "both" and file_path is None:
        raise ValueError("file_path is required when format='both'")

    log_level = getattr(logging, level)
    handlers: list[logging.Handler] = []

    if format in ("console", "both"):
        handlers.append(logging.StreamHandler(sys.stderr))

    if format in ("json", "both"):
        if file_path is not None:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                RotatingFileHandler(
                    file_path,
                    maxBytes=max_file_size_mb * 1024 * 1024,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
            )
        else:
            handlers.append(logging.StreamHandler(sys.stdout))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(log_level)
        root_logger.addHandler(handler)

    if format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    # cache_logger_on_first_use=False so module-level loggers pick up
    # configuration applied after import.
    structlog.configure(
        processors=_build_processors(renderer, include_timestamps),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> ServiceLogger:
    """Get a logger bound to ``component`` (e.g. "upstart", "sysvinit")."""
    return ServiceLogger(component, **initial_context)


__all__ = [
    "SENSITIVE_PATTERNS",
    "ServiceContext",
    "ServiceLogger",
    "configure_logging",
    "get_current_context",
    "get_logger",
    "with_context",
]
