"""Composition root for ``lib_context_log``.

Purpose
-------
Provide the entry points that wire adapters, the enrichment registry, and
settings into ready-to-use loggers. Application code should only need the
functions exported here plus the context carrier.

Contents
--------
* :func:`using_adapter` – logger bound to any adapter.
* :func:`nul` – the shared logger that discards everything.
* :func:`std_log` – logger writing through the stdlib :mod:`logging` package,
  configured from :class:`LogSettings` (environment variables by default).

System Role
-----------
This module connects the application layer with concrete adapters; it is the
canonical place to add constructors for new backends.
"""

from __future__ import annotations

import logging
from typing import Final

from .adapters.env.default import DefaultEnvLoader
from .adapters.nul.default import NulAdapter
from .adapters.stdlog.default import StdLogAdapter
from .application.enrichment import EnrichmentRegistry
from .application.logger import ContextLogger, NulLogger
from .application.ports import Adapter
from .domain.context import BACKGROUND, Context
from .domain.settings import LogSettings
from .observability import log_debug, make_event

_NUL: Final[NulLogger] = NulLogger(BACKGROUND, NulAdapter())


def using_adapter(
    adapter: Adapter,
    context: Context = BACKGROUND,
    *,
    registry: EnrichmentRegistry | None = None,
) -> ContextLogger:
    """Return a logger binding *adapter* to *context*.

    Parameters
    ----------
    adapter:
        Backend adapter; see :class:`lib_context_log.application.ports.Adapter`.
    context:
        Root context of the logger, :data:`BACKGROUND` unless given.
    registry:
        Enrichment registry to run on every derivation. ``None`` uses the
        process-wide registry.

    Examples
    --------
    >>> from lib_context_log.testing import RecordingAdapter
    >>> adapter = RecordingAdapter()
    >>> using_adapter(adapter, registry=EnrichmentRegistry()).warn("disk low")
    >>> adapter.messages()
    ['disk low']
    """

    return ContextLogger(context, adapter, registry=registry)


def nul() -> NulLogger:
    """Return the shared logger that never emits anything.

    Every derivation (``with_context``, ``new_entry``, ``with_field``) returns
    this same instance.

    Examples
    --------
    >>> nul().with_field("k", "v") is nul()
    True
    """

    return _NUL


def std_log(
    context: Context = BACKGROUND,
    *,
    settings: LogSettings | None = None,
    registry: EnrichmentRegistry | None = None,
) -> ContextLogger:
    """Return a logger writing rendered lines to a stdlib :class:`logging.Logger`.

    Why
    ----
    Most applications already configure :mod:`logging`; this keeps their
    handlers and formatters while adding context enrichment.

    What
    ----
    Reads :class:`LogSettings` from ``LIB_CONTEXT_LOG_*`` environment variables
    unless *settings* is given, and pre-applies the static fields to the
    adapter so every entry carries them.

    Raises
    ------
    InvalidSettings
        When environment settings are malformed.
    """

    if settings is None:
        settings = DefaultEnvLoader().settings()
    adapter = StdLogAdapter(
        logging.getLogger(settings.logger_name),
        fields=settings.fields,
        threshold=settings.threshold,
    )
    log_debug(
        "std_log_created",
        **make_event(
            "core",
            {"logger": settings.logger_name, "threshold": str(settings.threshold), "fields": sorted(settings.fields)},
        ),
    )
    return using_adapter(adapter, context, registry=registry)


__all__ = ["using_adapter", "nul", "std_log"]
