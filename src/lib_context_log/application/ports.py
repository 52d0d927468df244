"""Application-layer ports describing the logging object model.

Purpose
-------
Define the structural contracts between application code, the logger core, and
concrete backends so each side depends only on abstractions.

Contents
--------
* :class:`Adapter` – backend capability: emit, fresh copy, copy plus one field.
* :class:`Enricher` – the single capability handed to enrichment functions.
* :class:`Entry` – context-bound handle with per-level emission methods.
* :class:`Logger` – long-lived root binding used to mint entries.
* :data:`EnrichmentFunc` / :data:`ExitHook` – callable signatures.

System Role
-----------
Adapters in :mod:`lib_context_log.adapters` implement :class:`Adapter`;
:class:`lib_context_log.application.logger.ContextLogger` implements the rest.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, NoReturn, Protocol, runtime_checkable

from ..domain.context import Context
from ..domain.levels import Level


@runtime_checkable
class Adapter(Protocol):
    """Mediate between the abstract logger and a concrete backend.

    Why
    ----
    Keep formatting and I/O out of the core. Field accumulation is copy-on-write:
    :meth:`new_entry` and :meth:`with_field` return new adapters and never
    mutate the receiver, which is what makes shared loggers thread-safe.
    """

    def emit(self, level: Level, message: str) -> None:
        """Send *message* to the backend at *level*; I/O failures stay inside."""

    def new_entry(self) -> "Adapter":
        """Return an independent copy of the accumulated field state."""

    def with_field(self, name: str, value: Any) -> "Adapter":
        """Return a copy with one more named field."""


@runtime_checkable
class Enricher(Protocol):
    """Add one named value to an entry.

    Enrichment functions receive a draft entry through this narrow interface.
    """

    def with_field(self, name: str, value: Any) -> "Entry":
        """Return a new entry carrying the additional field."""


@runtime_checkable
class Entry(Enricher, Protocol):
    """A context-bound, field-enriched handle used to emit log lines."""

    @property
    def context(self) -> Context:
        """Context the entry is bound to."""

    @property
    def adapter(self) -> Adapter:
        """Adapter holding the accumulated fields."""

    @property
    def fields(self) -> Mapping[str, Any]:
        """One-off fields layered after pipeline enrichment."""

    def trace(self, message: str, *args: Any) -> None: ...

    def debug(self, message: str, *args: Any) -> None: ...

    def info(self, message: str, *args: Any) -> None: ...

    def warn(self, message: str, *args: Any) -> None: ...

    def error(self, value: object, *args: Any) -> None: ...

    def fatal(self, message: str, *args: Any) -> None: ...

    def fatal_error(self, error: BaseException) -> None: ...

    def with_context(self, context: Context) -> "Entry": ...

    def new_entry(self) -> "Entry": ...


@runtime_checkable
class Logger(Protocol):
    """Long-lived binding of an adapter to an initial context."""

    def with_context(self, context: Context) -> Entry:
        """Return an entry enriched from *context*."""

    def new_entry(self) -> Entry:
        """Return an entry enriched from the logger's own context."""


EnrichmentFunc = Callable[[Context, Enricher], Entry]
"""Transform a draft entry using values found in the active context."""

ExitHook = Callable[[int], NoReturn]
"""Terminate the process with the given status; must not return normally."""
