"""Logger/Entry state machine.

Purpose
-------
Bind an :class:`~lib_context_log.application.ports.Adapter` to an execution
:class:`~lib_context_log.domain.context.Context`, run the enrichment pipeline
whenever an entry is derived, and recover the originating context of errors
passed to log calls.

Contents
--------
* :class:`ContextLogger` – immutable implementation of both ``Logger`` and
  ``Entry``.
* :class:`NulLogger` – variant whose every derivation is itself.
* :func:`render` – ``%``-formatting that never raises.

System Role
-----------
Created by the composition root (:mod:`lib_context_log.core`) and handed to
application code directly or through the context carrier. Every method returns
a new value or performs I/O through the adapter, so one logger can be shared by
any number of threads without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Final, Mapping

from ..domain.context import Context
from ..domain.errorcontext import recover
from ..domain.levels import Level
from .enrichment import EnrichmentRegistry, default_registry
from .ports import Adapter, Entry
from .termination import terminate

_METHOD_NAMES: Final[dict[Level, str]] = {
    Level.TRACE: "trace",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warn",
    Level.ERROR: "error",
    Level.FATAL: "fatal",
}


@dataclass(frozen=True, slots=True, eq=False)
class ContextLogger:
    """A context-bound logger and entry.

    Every ``with_*`` method returns a new object; the receiver never changes.
    Two entries derived from the same context are distinct objects.

    Parameters
    ----------
    context:
        Context enrichment functions read from.
    adapter:
        Backend adapter holding accumulated fields.
    fields:
        One-off fields added with :meth:`with_field`. They are re-applied after
        the enrichment pipeline on every derivation, so registered enrichment
        never shadows them.
    registry:
        Enrichment registry to run; ``None`` means the process-wide registry,
        resolved on each derivation.

    Examples
    --------
    >>> from lib_context_log.domain.context import BACKGROUND
    >>> from lib_context_log.testing import RecordingAdapter
    >>> adapter = RecordingAdapter()
    >>> log = ContextLogger(BACKGROUND, adapter, registry=EnrichmentRegistry())
    >>> log.with_field("user", "ada").info("x=%d", 5)
    >>> adapter.records[-1]
    Emission(level=<Level.INFO: 3>, message='x=5', fields={'user': 'ada'})
    """

    context: Context
    adapter: Adapter
    fields: Mapping[str, Any] = field(default_factory=dict)
    registry: EnrichmentRegistry | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    # -- derivation ---------------------------------------------------------

    def with_context(self, context: Context) -> Entry:
        """Return a new entry enriched from *context*."""

        return self._from_context(context)

    def new_entry(self) -> Entry:
        """Return a new entry enriched from this entry's own context."""

        return self._from_context(self.context)

    def with_field(self, name: str, value: Any) -> Entry:
        """Return a copy carrying one more one-off field."""

        return replace(self, adapter=self.adapter.with_field(name, value), fields={**self.fields, name: value})

    def with_fields(self, **fields: Any) -> Entry:
        """Return a copy carrying every keyword as a one-off field."""

        entry: Entry = self
        for name, value in fields.items():
            entry = entry.with_field(name, value)
        return entry

    # -- emission -----------------------------------------------------------

    def trace(self, message: str, *args: Any) -> None:
        """Emit at ``TRACE``; with *args*, ``%``-format and recover error contexts."""

        self._log(Level.TRACE, message, args)

    def debug(self, message: str, *args: Any) -> None:
        """Emit at ``DEBUG``; with *args*, ``%``-format and recover error contexts."""

        self._log(Level.DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        """Emit at ``INFO``; with *args*, ``%``-format and recover error contexts."""

        self._log(Level.INFO, message, args)

    def warn(self, message: str, *args: Any) -> None:
        """Emit at ``WARN``; with *args*, ``%``-format and recover error contexts."""

        self._log(Level.WARN, message, args)

    def error(self, value: object, *args: Any) -> None:
        """Emit at ``ERROR``.

        With *args*, *value* is a format string handled like :meth:`info`.
        Otherwise an exception is logged with the context recovered from it,
        a string is logged as-is and anything else through :func:`str`.
        """

        if args:
            self._log(Level.ERROR, str(value), args)
        elif isinstance(value, BaseException):
            self._from_context(recover(self.context, value)).adapter.emit(Level.ERROR, _describe(value))
        else:
            self._emit(Level.ERROR, value if isinstance(value, str) else str(value))

    def fatal(self, message: str, *args: Any) -> None:
        """Emit at ``FATAL`` and then call the exit hook with status 1."""

        if args:
            self._log(Level.FATAL, message, args)
            return
        self._emit(Level.FATAL, message)
        terminate(1)

    def fatal_error(self, error: BaseException) -> None:
        """Emit *error* at ``FATAL`` using its recovered context, then exit with 1."""

        self._from_context(recover(self.context, error)).adapter.emit(Level.FATAL, _describe(error))
        terminate(1)

    # -- internals ----------------------------------------------------------

    def _log(self, level: Level, message: str, args: tuple[Any, ...]) -> None:
        if not args:
            self._emit(level, message)
            return
        entry = self._entry_from_args(args)
        getattr(entry, _METHOD_NAMES[level])(render(message, args))

    def _emit(self, level: Level, message: str) -> None:
        self._from_context(self.context).adapter.emit(level, message)

    def _entry_from_args(self, args: tuple[Any, ...]) -> Entry:
        """Return the entry for the first error in *args* carrying a different context.

        Later errors are ignored even if they carry contexts of their own. When
        no argument qualifies the receiver itself is returned.
        """

        for arg in args:
            if not isinstance(arg, BaseException):
                continue
            context = recover(self.context, arg)
            if context is self.context:
                continue
            return self._from_context(context)
        return self

    def _from_context(self, context: Context) -> Entry:
        """Derive a fresh entry for *context* through the enrichment pipeline.

        The draft is a copy of the receiver, so subclasses keep their type and
        extra attributes across derivations.
        """

        entry: Entry = replace(self, context=context, adapter=self.adapter.new_entry(), fields={})
        registry = self.registry if self.registry is not None else default_registry()
        for enrich in registry.snapshot():
            entry = enrich(context, entry)
        for name, value in self.fields.items():
            entry = entry.with_field(name, value)
        if isinstance(entry, ContextLogger):
            # pipeline output lives in the adapter; only one-off fields are re-applied later
            entry = replace(entry, fields=self.fields)
        return entry


class NulLogger(ContextLogger):
    """Logger that discards everything and derives only itself.

    Fatal calls still invoke the exit hook: terminating is the caller's choice
    of severity, not output.
    """

    __slots__ = ()

    def with_field(self, name: str, value: Any) -> Entry:
        return self

    def _from_context(self, context: Context) -> Entry:
        return self


def render(message: object, args: tuple[Any, ...]) -> str:
    """``%``-format *message* with *args* like :mod:`logging`, never raising.

    A single non-empty mapping argument formats by name. Malformed formats fall
    back to the message followed by the argument tuple.

    Examples
    --------
    >>> render("x=%d", (5,)), render("%(user)s", ({"user": "ada"},))
    ('x=5', 'ada')
    >>> render("x=%d", ("five",))
    "x=%d ('five',)"
    """

    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]
    try:
        return str(message) % values
    except (TypeError, ValueError, KeyError):
        return f"{message} {args!r}"


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__
