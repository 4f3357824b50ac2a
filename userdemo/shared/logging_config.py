# userdemo\shared\logging_config.py
import logging
import sys

import structlog
from opentelemetry import trace

from userdemo.shared.config import LogFormat, settings


def add_trace_context(_, __, event_dict):
    """
    Adds the ids of the active span, so log lines can be joined with traces.
    Lines logged outside a recording span get no ids.
    """
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def add_service_name(_, __, event_dict):
    event_dict.setdefault("service", settings.APP_NAME)
    return event_dict


def _renderer():
    if settings.LOG_FORMAT == LogFormat.JSON:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=settings.DEBUG)


def configure_logging() -> None:
    """
    Configures structlog, then points the standard library (uvicorn, fastapi)
    at the same renderer so every line on stdout has one format.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_name,
        add_trace_context,
    ]
    level = logging.getLevelName(settings.LOG_LEVEL.upper())

    structlog.configure(
        processors=shared_processors + [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(),
        ],
    ))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
