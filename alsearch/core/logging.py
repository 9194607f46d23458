"""
Search Public API Client - Structured Logging

The library only emits through ``get_logger``; the host application owns
structlog and stdlib logging configuration. ``configure_logging`` is an
opt-in helper for scripts and small applications that have no setup of
their own (``ALSEARCH_CONFIGURE_LOGGING=true``).

Patterns Applied:
- structlog BoundLogger with JSON output
- Events routed through stdlib loggers named after the emitting module
"""

import logging
from typing import Any

import structlog
from structlog.typing import EventDict, Processor

SERVICE_LABEL = "alsearch-client"


def add_service_info(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Add client metadata to every log entry.

    Args:
        logger: The logger instance (unused but required by structlog interface)
        method_name: The log method name (unused but required by structlog interface)
        event_dict: The event dictionary to modify

    Returns:
        Modified event dictionary with service info
    """
    event_dict["service"] = SERVICE_LABEL
    return event_dict


def build_processors(json_output: bool = True) -> list[Processor]:
    """Return the processor chain used by configure_logging.

    Args:
        json_output: JSON renderer when True, console renderer otherwise
    """
    renderer: Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """Route structlog events to stdlib loggers with the client's processors.

    Replaces the process-wide structlog configuration, so call it only from
    an application that does not configure structlog itself. No handlers are
    added; records follow whatever handlers the ``alsearch`` logger tree or
    the root logger already has.

    Args:
        log_level: Minimum level for the ``alsearch`` logger
        json_output: Whether to use JSON renderer (True for production)
    """
    logging.getLogger("alsearch").setLevel(
        getattr(logging, log_level.upper(), logging.INFO)
    )
    structlog.configure(
        processors=build_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        structlog BoundLogger instance
    """
    return structlog.get_logger(name)
