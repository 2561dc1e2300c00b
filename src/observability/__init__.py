"""Observability module for structured logging."""

from src.observability.logging import (
    LogFormat,
    bind_run_context,
    clear_run_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    "LogFormat",
    "bind_run_context",
    "clear_run_context",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
