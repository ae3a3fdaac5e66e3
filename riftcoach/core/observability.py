"""Observability for the analysis engine.

Structured logging through structlog (bridged onto stdlib logging) and the
``trace_analysis`` decorator, which records duration and failures of the
engine's entry points under a per-call execution id.
"""

import functools
import json
import logging
import re
import sys
import time
import traceback
from collections.abc import Callable
from typing import Any, TextIO, TypeVar, cast

import structlog
from pydantic import BaseModel, ConfigDict, Field
from structlog.contextvars import bind_contextvars, unbind_contextvars

from riftcoach.config.settings import get_settings

F = TypeVar("F", bound=Callable[..., Any])

# PUUIDs identify real accounts, keep them out of log payloads
_SENSITIVE_KEY_RE = re.compile(r"(puuid|token|key|secret|password)", re.IGNORECASE)


_ROOT_LOGGER = "riftcoach"
_HANDLER_NAME = "riftcoach-stream"


def configure_logging(
    level: str | None = None,
    *,
    json_output: bool | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog over the ``riftcoach`` stdlib logger.

    Unset arguments come from ``Settings.log_level`` / ``Settings.log_json``;
    JSON is picked when both are unset and stderr is not a TTY. Records only
    leave the process through ``stream`` or handlers the host application
    installs, the engine never writes to stdout itself.
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json_output is None:
        json_output = settings.log_json
    if json_output is None:
        json_output = not sys.stderr.isatty()

    root = logging.getLogger(_ROOT_LOGGER)
    root.setLevel(level)
    for handler in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(handler)
    if stream is not None:
        handler = logging.StreamHandler(stream)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)

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
            structlog.processors.JSONRenderer()
            if json_output
            else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Reconfiguration (and capture_logs) must reach existing loggers
        cache_logger_on_first_use=False,
    )


configure_logging()

logger = structlog.get_logger(__name__)


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


class FunctionTrace(BaseModel):
    """Execution trace of one decorated call."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    function_name: str = Field(description="Fully qualified function name")
    execution_id: str = Field(description="Unique execution ID")
    duration_ms: float | None = Field(default=None, description="Execution duration in milliseconds")
    kwargs: dict[str, Any] = Field(default_factory=dict, description="Keyword arguments")
    is_success: bool = Field(default=True)
    error_type: str | None = Field(default=None)
    error_message: str | None = Field(default=None)
    error_traceback: str | None = Field(default=None)


def _serialize_value(value: Any, max_length: int = 500) -> Any:
    """Safely serialize a value for logging."""
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        json_str = json.dumps(value, default=str)
        if len(json_str) > max_length:
            return json_str[:max_length] + "..."
        return json.loads(json_str)
    except (TypeError, ValueError):
        str_repr = str(value)
        if len(str_repr) > max_length:
            return str_repr[:max_length] + "..."
        return str_repr


def trace_analysis(
    *,
    capture_kwargs: bool = True,
    log_level: str = "INFO",
) -> Callable[[F], F]:
    """Decorator tracing a synchronous engine entry point.

    Positional arguments (timelines, match payloads) are never logged;
    keyword arguments are logged redacted when ``capture_kwargs`` is set.
    Exceptions are logged with their traceback and re-raised.
    """

    def decorator(func: F) -> F:
        function_name = f"{func.__module__}.{func.__name__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            execution_id = f"{function_name}_{time.time_ns() // 1000}"
            trace = FunctionTrace(
                function_name=function_name,
                execution_id=execution_id,
            )
            if capture_kwargs:
                trace.kwargs = _redact_obj({k: _serialize_value(v) for k, v in kwargs.items()})

            bind_contextvars(execution_id=execution_id)
            logger.log(
                logging.getLevelName(log_level.upper()),
                "analysis_started",
                function=function_name,
                execution_id=execution_id,
                kwargs=trace.kwargs if capture_kwargs else None,
            )
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                trace.duration_ms = (time.perf_counter() - start_time) * 1000
                trace.is_success = False
                trace.error_type = type(e).__name__
                trace.error_message = str(e)
                trace.error_traceback = traceback.format_exc()
                logger.error(
                    "analysis_failed",
                    function=function_name,
                    execution_id=execution_id,
                    duration_ms=trace.duration_ms,
                    error_type=trace.error_type,
                    error_message=trace.error_message,
                    traceback=trace.error_traceback,
                )
                raise
            else:
                trace.duration_ms = (time.perf_counter() - start_time) * 1000
                logger.log(
                    logging.getLevelName(log_level.upper()),
                    "analysis_finished",
                    function=function_name,
                    execution_id=execution_id,
                    duration_ms=trace.duration_ms,
                )
                return result
            finally:
                unbind_contextvars("execution_id")

        return cast(F, wrapper)

    return decorator


def bind_match_context(match_id: str, participant_id: int | None = None) -> None:
    """Attach match identity to every log line of the current context."""
    bind_contextvars(match_id=match_id, participant_id=participant_id)


def clear_match_context() -> None:
    unbind_contextvars("match_id", "participant_id")
