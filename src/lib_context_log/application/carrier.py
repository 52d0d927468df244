"""Carry a logger inside an execution context.

Modules that prefer not to add a logger parameter to their configuration can
accept a :class:`~lib_context_log.domain.context.Context` instead and look the
logger up here. The logger only ever travels inside context values; nothing is
stored at module level.
"""

from __future__ import annotations

from typing import Final

from ..domain.context import Context
from .ports import Entry, Logger


class _LoggerKey:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<logger>"


_LOGGER_KEY: Final = _LoggerKey()


def with_logger(context: Context, logger: Logger) -> Context:
    """Return a child of *context* carrying *logger*."""

    return context.with_value(_LOGGER_KEY, logger)


def logger_from_context(context: Context) -> Logger | None:
    """Return the logger bound to *context*, or ``None``."""

    return context.value(_LOGGER_KEY)


def entry_from_context(context: Context) -> Entry | None:
    """Return a freshly enriched entry for *context*, or ``None`` without a logger.

    Every call runs the enrichment pipeline again; nothing is cached.

    Examples
    --------
    >>> from lib_context_log.domain.context import BACKGROUND
    >>> entry_from_context(BACKGROUND) is None
    True
    """

    logger = logger_from_context(context)
    if logger is None:
        return None
    return logger.with_context(context)
