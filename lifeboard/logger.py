"""Structured logging configuration.

All log records, from structlog and from stdlib loggers (uvicorn, SQLAlchemy,
alembic), are rendered by one structlog ``ProcessorFormatter`` on stdout:
JSON lines normally, a console renderer when ``DEBUG`` is on.

Also provides:
- request-scoped context binding (request id, method, path)
- timing helpers for sync and async blocks
- a decorator for outbound API calls
- an exception logging helper
"""

import inspect
import logging
import sys
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from contextlib import asynccontextmanager, contextmanager
from functools import wraps
from typing import Any, ParamSpec, TypeVar

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import Processor

from lifeboard.config import settings

P = ParamSpec("P")
T = TypeVar("T")

SHARED_PROCESSORS: list[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.format_exc_info,
    structlog.processors.TimeStamper(fmt="iso"),
]


def configure_logging(*, debug: bool | None = None) -> None:
    """Route structlog through the stdlib root logger with a single stdout handler."""
    debug = settings.debug if debug is None else debug
    renderer: Processor = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=SHARED_PROCESSORS)
    )
    logging.basicConfig(handlers=[handler], level=logging.DEBUG if debug else logging.INFO)


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)


def bind_request_context(request_id: str, method: str, path: str) -> None:
    """Start a fresh log context for one HTTP request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)


def current_request_id() -> str | None:
    return structlog.contextvars.get_contextvars().get("request_id")


# =============================================================================
# Timing Utilities
# =============================================================================


def _emit_timing(
    log: BoundLogger,
    level: str,
    operation: str,
    fields: dict[str, Any],
    start: float,
    context: dict[str, Any],
) -> None:
    fields["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)
    getattr(log, level, log.info)(f"{operation} completed", operation=operation, **context, **fields)


@contextmanager
def log_timing(
    operation: str,
    logger: BoundLogger | None = None,
    level: str = "info",
    **context: Any,
) -> Iterator[dict[str, Any]]:
    """Log how long a block took.

    The yielded dict collects extra fields to log with the timing:

        with log_timing("build_report", logger=logger, user_id=str(user_id)) as timing:
            report = build_report(rows)
            timing["row_count"] = len(rows)
    """
    log = logger or get_logger(__name__)
    start = time.perf_counter()
    fields: dict[str, Any] = {}
    try:
        yield fields
    finally:
        _emit_timing(log, level, operation, fields, start, context)


@asynccontextmanager
async def async_log_timing(
    operation: str,
    logger: BoundLogger | None = None,
    level: str = "info",
    **context: Any,
) -> AsyncIterator[dict[str, Any]]:
    """Async twin of ``log_timing`` for blocks that await (queries, HTTP calls)."""
    log = logger or get_logger(__name__)
    start = time.perf_counter()
    fields: dict[str, Any] = {}
    try:
        yield fields
    finally:
        _emit_timing(log, level, operation, fields, start, context)


def log_external_api(
    service: str,
    *,
    logger: BoundLogger | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Log every call of a coroutine that talks to an outside service.

    Successes log at info, failures at warning with the error; the exception
    always propagates to the caller.
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        if not inspect.iscoroutinefunction(func):
            raise TypeError("log_external_api only wraps coroutine functions")
        log = logger or get_logger(func.__module__)

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            start = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                log.warning(
                    f"External API call to {service} failed",
                    service=service,
                    function=func.__name__,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise
            log.info(
                f"External API call to {service}",
                service=service,
                function=func.__name__,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return result

        return wrapper

    return decorator


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
    """Log an exception with its type and module alongside ``extra`` fields.

    Usage:
        except DependencyError as exc:
            log_exception(logger, exc, "AI analysis failed", user_id=str(user_id))
    """
    fields: dict[str, Any] = {
        "error": str(exc),
        "error_type": type(exc).__name__,
        "error_module": type(exc).__module__,
        **extra,
    }
    if include_traceback:
        fields["exc_info"] = exc
    getattr(logger, level, logger.error)(context, **fields)
