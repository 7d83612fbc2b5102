"""Structured logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from lumadocs import __version__

SERVICE_NAME = "lumadocs"

# Third-party loggers that are chatty at INFO/DEBUG during fetches and indexing.
QUIET_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "markdown_it")


def _add_service(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog for the viewer process.

    Events go to stdout as JSON lines, or through the coloured console
    renderer in debug mode. Every event is tagged with the service name and
    version, and any request id bound by the request middleware.

    Args:
        debug: Enable debug-level logging and the console renderer when True.
    """
    level = logging.DEBUG if debug else logging.INFO
    renderer: Processor = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_service,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
