"""Structured logging with trace_id and resolution trace events."""
import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

# Context variable for trace_id so it is attached to every log in the current resolve
trace_id_ctx: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    return trace_id_ctx.get()


def set_trace_id(trace_id: str) -> None:
    trace_id_ctx.set(trace_id)


def add_trace_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add trace_id to every event."""
    tid = get_trace_id()
    if tid:
        event_dict["trace_id"] = tid
    return event_dict


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog and stdlib logging. Call once at startup."""
    level = getattr(logging, log_level, logging.INFO)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_trace_id,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=True)
            if log_level == "DEBUG"
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        # stdout is reserved for the CLI's own output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# Convenience: log catalog and resolution events with consistent event names
def log_catalog_loaded(
    logger: structlog.stdlib.BoundLogger,
    skills_dir: str,
    skill_count: int,
    error_count: int,
) -> None:
    logger.info(
        "catalog_loaded",
        skills_dir=skills_dir,
        skill_count=skill_count,
        error_count=error_count,
    )


def log_skill_load_error(
    logger: structlog.stdlib.BoundLogger,
    path: str,
    error: str,
) -> None:
    logger.warning("skill_load_error", path=path, error=error)


def log_resolve_start(
    logger: structlog.stdlib.BoundLogger,
    user_message: str,
    catalog_size: int,
    trace_id: str,
) -> None:
    msg = user_message[:200] + "..." if len(user_message) > 200 else user_message
    logger.info(
        "resolve_start",
        user_message=msg,
        catalog_size=catalog_size,
        trace_id=trace_id,
    )


def log_reasoning_request(
    logger: structlog.stdlib.BoundLogger,
    model: str,
    catalog_size: int,
) -> None:
    logger.info("reasoning_request", model=model, catalog_size=catalog_size)


def log_reasoning_response(
    logger: structlog.stdlib.BoundLogger,
    model: str,
    content_length: int,
    prompt_tokens: int | None = None,
    completion_tokens: int | None = None,
    total_tokens: int | None = None,
) -> None:
    logger.info(
        "reasoning_response",
        model=model,
        content_length=content_length,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        total_tokens=total_tokens,
    )


def log_reasoning_unavailable(
    logger: structlog.stdlib.BoundLogger,
    reason: str,
) -> None:
    logger.warning("reasoning_unavailable", reason=reason)


def log_resolution(
    logger: structlog.stdlib.BoundLogger,
    skill_name: str,
    command: str,
    source: str,
) -> None:
    logger.info(
        "resolution",
        skill_name=skill_name,
        command=command,
        source=source,
    )
