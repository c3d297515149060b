"""Structured logging configuration.

This module provides:
- Structured logging via structlog with JSON output for production
- Optional OpenTelemetry (OTEL) log export
- A contextual ``Logger`` wrapper used by services and controllers
- Timing and exception logging helpers
"""

import logging
import sys
import time
import traceback
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from userhub.config import parse_key_value_pairs, settings


def _build_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderer() -> Processor:
    if settings.debug:
        # Human-readable logs for development
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def _resolve_level() -> int:
    if settings.log_level:
        level = logging.getLevelName(settings.log_level.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.debug else logging.INFO


def _build_otlp_logs_endpoint(endpoint: str) -> str:
    trimmed = endpoint.rstrip("/")
    if trimmed.endswith("/v1/logs"):
        return trimmed
    return f"{trimmed}/v1/logs"


def _configure_otel_logging() -> None:
    if not settings.otel_exporter_otlp_endpoint:
        return

    try:
        from opentelemetry._logs import set_logger_provider
        from opentelemetry.exporter.otlp.proto.http._log_exporter import OTLPLogExporter
        from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
        from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
        from opentelemetry.sdk.resources import Resource
    except ImportError:
        logging.getLogger(__name__).warning(
            "OTEL log exporter not available",
            exc_info=True,
        )
        return

    resource_attributes = {"service.name": settings.otel_service_name}
    resource_attributes.update(parse_key_value_pairs(settings.otel_resource_attributes))
    resource = Resource.create(resource_attributes)

    provider = LoggerProvider(resource=resource)
    exporter = OTLPLogExporter(
        endpoint=_build_otlp_logs_endpoint(settings.otel_exporter_otlp_endpoint),
    )
    provider.add_log_record_processor(BatchLogRecordProcessor(exporter))
    set_logger_provider(provider)

    handler = LoggingHandler(level=logging.INFO, logger_provider=provider)
    logging.getLogger().addHandler(handler)


def configure_logging() -> None:
    """Configure structlog for structured logging and optional OTEL export."""

    processors = _build_processors()
    renderer = _select_renderer()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=processors,
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logging.basicConfig(
        handlers=[handler],
        level=_resolve_level(),
    )

    _configure_otel_logging()


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)


# =============================================================================
# Contextual Logger
# =============================================================================


def exception_fields(exc: BaseException) -> dict[str, Any]:
    """Capture an exception as structured log fields."""
    return {
        "error_name": type(exc).__name__,
        "error_message": str(exc),
        "error_module": type(exc).__module__,
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }


class Logger:
    """Leveled logger that attaches a fixed context to every record.

    Usage:
        logger = Logger({"module": "UserService"})
        logger.info("User created", user_id=user.id)
        request_logger = logger.child(request_id="abc")

    ``error`` and ``fatal`` accept either a mapping of structured fields or an
    exception; exceptions are recorded as ``error_name``/``error_message``/
    ``stack`` fields instead of being formatted into the message.
    """

    def __init__(
        self,
        context: Mapping[str, Any] | None = None,
        *,
        name: str | None = None,
    ) -> None:
        self._context: dict[str, Any] = dict(context or {})
        self._name = name or "userhub"
        self._logger: BoundLogger = get_logger(self._name).bind(**self._context)

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def child(self, context: Mapping[str, Any] | None = None, **extra: Any) -> "Logger":
        """Return a new logger with merged context; this logger is unchanged."""
        merged = {**self._context, **dict(context or {}), **extra}
        return Logger(merged, name=self._name)

    def trace(self, message: str, **fields: Any) -> None:
        # stdlib logging has no TRACE level; tag the record instead
        self._logger.debug(message, trace=True, **fields)

    def debug(self, message: str, **fields: Any) -> None:
        self._logger.debug(message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._logger.info(message, **fields)

    def warn(self, message: str, **fields: Any) -> None:
        self._logger.warning(message, **fields)

    warning = warn

    def error(
        self,
        message: str,
        error: BaseException | Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        self._logger.error(message, **self._error_payload(error), **fields)

    def fatal(
        self,
        message: str,
        error: BaseException | Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        self._logger.critical(message, fatal=True, **self._error_payload(error), **fields)

    @staticmethod
    def _error_payload(error: BaseException | Mapping[str, Any] | None) -> dict[str, Any]:
        if error is None:
            return {}
        if isinstance(error, BaseException):
            return exception_fields(error)
        return dict(error)


# =============================================================================
# Timing Utilities
# =============================================================================


@asynccontextmanager
async def async_log_timing(
    operation: str,
    logger: BoundLogger | Logger | None = None,
    level: str = "info",
    **context: Any,
) -> AsyncIterator[dict[str, Any]]:
    """Async context manager to log operation timing.

    Usage:
        async with async_log_timing("db_query", logger=logger, table="users"):
            result = await db.execute(query)

    Args:
        operation: Name of the operation being timed
        logger: Logger instance (uses module logger if not provided)
        level: Log level to use (default: info)
        **context: Additional context to include in the log

    Yields:
        A dict that can be updated with additional context during the operation.
        The dict will include 'duration_ms' after the operation completes.
    """
    log = logger or get_logger(__name__)
    start = time.perf_counter()
    result_context: dict[str, Any] = {}

    try:
        yield result_context
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        result_context["duration_ms"] = round(duration_ms, 2)

        # Build final context, excluding duration_ms from result_context since we add it explicitly
        extra_context = {k: v for k, v in result_context.items() if k != "duration_ms"}

        log_method = getattr(log, level, log.info)
        log_method(
            f"{operation} completed",
            operation=operation,
            duration_ms=result_context["duration_ms"],
            **context,
            **extra_context,
        )


# =============================================================================
# Exception Logging Helpers
# =============================================================================


def log_exception(
    logger: BoundLogger,
    exc: BaseException,
    context: str,
    *,
    level: str = "error",
    include_traceback: bool = True,
    **extra: Any,
) -> None:
    """Log an exception with full context.

    Usage:
        except ValueError as exc:
            log_exception(logger, exc, "Failed to parse id", raw_id=raw_id)

    Args:
        logger: Logger instance
        exc: The exception to log
        context: Human-readable context message
        level: Log level (default: error)
        include_traceback: Whether to include full traceback (default: True)
        **extra: Additional context to include
    """
    log_method = getattr(logger, level, logger.error)

    log_kwargs: dict[str, Any] = {
        "error": str(exc),
        "error_type": type(exc).__name__,
        "error_module": type(exc).__module__,
        **extra,
    }

    if include_traceback:
        log_method(context, exc_info=exc, **log_kwargs)
    else:
        log_method(context, **log_kwargs)
