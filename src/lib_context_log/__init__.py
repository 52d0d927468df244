"""Public package surface for ``lib_context_log``.

Application code builds a logger once (:func:`using_adapter`, :func:`std_log`
or :func:`nul`), derives entries per unit of work with ``with_context``, and
registers enrichment functions at start-up with :func:`register_enrichment`.
Errors wrapped with :func:`attach` carry their originating context into
whichever log call eventually reports them.
"""

from __future__ import annotations

from .application.carrier import entry_from_context, logger_from_context, with_logger
from .application.enrichment import EnrichmentRegistry, default_registry, enrich_from_value, register_enrichment
from .application.logger import ContextLogger, NulLogger
from .application.ports import Adapter, EnrichmentFunc, Enricher, Entry, ExitHook, Logger
from .application.termination import exit_hook, get_exit_hook, set_exit_hook
from .core import nul, std_log, using_adapter
from .domain.context import BACKGROUND, Context
from .domain.errorcontext import ContextualError, attach, recover
from .domain.errors import ContextLogError, InvalidLevel, InvalidSettings
from .domain.levels import Level, level_name
from .domain.settings import LogSettings
from .observability import get_logger

__all__ = [
    "Adapter",
    "BACKGROUND",
    "Context",
    "ContextLogError",
    "ContextLogger",
    "ContextualError",
    "EnrichmentFunc",
    "EnrichmentRegistry",
    "Enricher",
    "Entry",
    "ExitHook",
    "InvalidLevel",
    "InvalidSettings",
    "Level",
    "LogSettings",
    "Logger",
    "NulLogger",
    "attach",
    "default_registry",
    "enrich_from_value",
    "entry_from_context",
    "exit_hook",
    "get_exit_hook",
    "get_logger",
    "level_name",
    "logger_from_context",
    "nul",
    "recover",
    "register_enrichment",
    "set_exit_hook",
    "std_log",
    "using_adapter",
    "with_logger",
]
