"""Observability helpers for matchlens.

This module configures structured logging and provides the ``debug_wrapper``
decorator used to trace engine stages and adapter calls.
"""

import functools
import inspect
import json
import logging
import re
import sys
import time
import traceback
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

import structlog
from pydantic import BaseModel, ConfigDict, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

from matchlens.config.settings import get_settings

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        structlog.processors.dict_tracebacks,
        structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),  # type: ignore[list-item]
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger("matchlens")

F = TypeVar("F", bound=Callable[..., Any])


def configure_stdlib_json_logging(
    level: str | None = None, file_target: str | None = None
) -> None:
    """Route stdlib ``logging`` records through a structlog JSON formatter.

    Replaces the root handlers. ``level`` defaults to ``settings.app_log_level``.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if file_target:
        handlers.append(logging.FileHandler(file_target, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel((level or get_settings().app_log_level).upper())


# Player identifiers are treated like credentials in logs
_SENSITIVE_KEY_RE = re.compile(
    r"(token|key|secret|password|authorization|auth|puuid)", re.IGNORECASE
)


def set_correlation_id(correlation_id: str) -> None:
    """Bind a correlation id to every log line emitted in this context."""
    bind_contextvars(correlation_id=correlation_id)


def clear_correlation_id() -> None:
    unbind_contextvars("correlation_id")


def _mask_scalar(value: Any) -> Any:
    if value is None:
        return None
    s = str(value)
    if len(s) <= 8:
        return "***"
    return f"{s[:4]}…{s[-3:]}"


def _redact_obj(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: (_mask_scalar(v) if _SENSITIVE_KEY_RE.search(str(k)) else _redact_obj(v))
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_redact_obj(i) for i in obj]
    return obj


def _safe_serialize_kv(key: str, value: Any, max_length: int) -> Any:
    if _SENSITIVE_KEY_RE.search(str(key)):
        return _mask_scalar(value)
    return _redact_obj(_serialize_value(value, max_length))


class FunctionTrace(BaseModel):
    """Model for function execution trace data."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    duration_ms: float | None = Field(default=None)

    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)
    result: Any | None = Field(default=None)

    is_success: bool = Field(default=True)
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)

    is_async: bool = Field(default=False)
    metadata: dict[str, Any] = Field(default_factory=dict)


def _serialize_value(value: Any, max_length: int = 1000) -> Any:
    """Safely serialize a value for logging, truncating large payloads."""
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json", exclude_unset=True)

        json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)

    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def _emit(level: str, event: str, **fields: Any) -> None:
    getattr(logger, level.lower(), logger.info)(event, **fields)


def debug_wrapper(
    *,
    capture_result: bool = True,
    capture_args: bool = True,
    max_arg_length: int = 1000,
    log_level: str = "INFO",
    add_metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """Decorator for function tracing.

    Logs entry, duration, the (optionally captured) result and any exception
    with its traceback. Works for both sync and async callables. Exceptions
    are always re-raised.

    Example:
        >>> @debug_wrapper(capture_result=False)
        ... def analyze(records: list) -> int:
        ...     return len(records)
    """

    def decorator(func: F) -> F:
        is_async = inspect.iscoroutinefunction(func)
        function_name = f"{func.__module__}.{func.__name__}"

        def _start(args: tuple[Any, ...], kwargs: dict[str, Any]) -> FunctionTrace:
            execution_id = f"{function_name}_{int(time.time() * 1000000)}"
            trace = FunctionTrace(
                function_name=function_name,
                execution_id=execution_id,
                is_async=is_async,
                metadata=add_metadata or {},
            )
            if capture_args:
                trace.args = [_redact_obj(_serialize_value(a, max_arg_length)) for a in args]
                trace.kwargs = {
                    k: _safe_serialize_kv(k, v, max_arg_length) for k, v in kwargs.items()
                }
            bind_contextvars(execution_id=execution_id)
            _emit(
                log_level,
                f"Executing function: {function_name}",
                execution_id=execution_id,
                args=trace.args if capture_args else None,
                kwargs=trace.kwargs if capture_args else None,
                **trace.metadata,
            )
            return trace

        def _succeed(trace: FunctionTrace, result: Any, started: float) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            if capture_result:
                trace.result = _redact_obj(_serialize_value(result, max_arg_length))
            _emit(
                log_level,
                f"Successfully executed: {function_name}",
                execution_id=trace.execution_id,
                duration_ms=trace.duration_ms,
                result=trace.result if capture_result else None,
            )

        def _fail(trace: FunctionTrace, exc: Exception, started: float) -> None:
            trace.duration_ms = (time.perf_counter() - started) * 1000
            trace.is_success = False
            trace.error_type = type(exc).__name__
            trace.error_message = str(exc)
            logger.error(
                f"Error in function: {function_name}",
                execution_id=trace.execution_id,
                duration_ms=trace.duration_ms,
                error_type=trace.error_type,
                error_message=trace.error_message,
                traceback=traceback.format_exc(),
            )

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs)
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _fail(trace, e, started)
                raise
            finally:
                unbind_contextvars("execution_id")
            _succeed(trace, result, started)
            return result

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            trace = _start(args, kwargs)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _fail(trace, e, started)
                raise
            finally:
                unbind_contextvars("execution_id")
            _succeed(trace, result, started)
            return result

        if is_async:
            return cast(F, async_wrapper)
        return cast(F, sync_wrapper)

    return decorator


def trace_performance(func: F) -> F:
    """Decorator focused on timing; arguments and results are not captured."""
    return debug_wrapper(
        capture_result=False,
        capture_args=False,
        log_level="DEBUG",
    )(func)


def trace_adapter(func: F) -> F:
    """Decorator specifically for adapter layer functions."""
    return debug_wrapper(
        capture_result=False,
        capture_args=True,
        log_level="INFO",
        add_metadata={"layer": "adapter"},
    )(func)
