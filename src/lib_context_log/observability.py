"""Diagnostics about the logging layer itself.

Purpose
    Report what the library does to its own wiring (enrichment registration,
    exit-hook replacement, settings loading) without ever routing those events
    through a user's adapter.

Contents
    - ``get_logger``: returns the shared package logger (quiet by default).
    - ``log_debug`` / ``log_info``: emit structured entries via a single private
      emitter.
    - ``make_event``: convenience builder for structured event payloads.

System Integration
    Used by the application layer and adapters. The package logger carries a
    ``NullHandler`` so nothing is printed unless the host application attaches
    a handler.
"""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_context_log")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Expose the package logger so applications may attach handlers."""

    return _LOGGER


def log_debug(message: str, **fields: Any) -> None:
    """Emit a structured debug diagnostic."""

    _emit(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    """Emit a structured info diagnostic."""

    _emit(logging.INFO, message, fields)


def make_event(component: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Build a structured payload naming the *component* that produced it.

    Examples
    --------
    >>> make_event('enrichment', {'registered': 2})
    {'component': 'enrichment', 'registered': 2}
    """

    event: dict[str, Any] = {"component": component}
    if payload:
        event |= dict(payload)
    return event


def _emit(level: int, message: str, fields: Mapping[str, Any]) -> None:
    """Send a diagnostic through the shared logger with its structured fields."""

    _LOGGER.log(level, message, extra={"context": dict(fields)})
