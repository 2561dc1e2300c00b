"""Structured logging configuration for the ranking engine."""

import logging
import sys
from typing import TYPE_CHECKING, Literal, TextIO

import structlog


if TYPE_CHECKING:
    from src.settings.app import RankerSettings


LogFormat = Literal["json", "console", "auto"]

SERVICE_NAME = "lang-ranker"


def _add_service(
    _logger: object, _method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _renderer(log_format: LogFormat, output: TextIO) -> structlog.types.Processor:
    """Pick the final renderer.

    ``auto`` renders for humans when ``output`` is a terminal and as JSON
    lines otherwise (pipes, files, CI logs).
    """
    is_tty = output.isatty()
    if log_format == "console" or (log_format == "auto" and is_tty):
        return structlog.dev.ConsoleRenderer(colors=is_tty)
    return structlog.processors.JSONRenderer(sort_keys=True)


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    log_format: LogFormat = "json",
) -> None:
    """Configure structured logging for the ranking engine.

    Every event carries ``service``, ``level`` and an ISO ``timestamp``, plus
    the run id bound through ``bind_run_context``. Ranking events add
    ``component`` and, where relevant, ``scope``.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        log_format: ``json``, ``console`` or ``auto`` (default: json).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        _renderer(log_format, output),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )


def configure_logging_from_settings(
    settings: "RankerSettings", output: TextIO = sys.stderr
) -> None:
    """Configure logging from ``LANG_RANKER_LOG_*`` settings.

    Args:
        settings: Loaded ranker settings.
        output: Output stream (default: stderr).
    """
    configure_logging(
        level=settings.log_level_number,
        output=output,
        log_format=settings.log_format,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_run_context(run_id: str) -> None:
    """Bind a run identifier to all subsequent log messages.

    Args:
        run_id: Unique identifier of the ranking run.
    """
    structlog.contextvars.bind_contextvars(run_id=run_id)


def clear_run_context() -> None:
    """Clear run context from log messages."""
    structlog.contextvars.unbind_contextvars("run_id")
