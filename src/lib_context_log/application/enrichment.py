"""Ordered registry of enrichment functions.

Purpose
-------
Hold the functions that turn a context plus a draft entry into an enriched
entry. Every derivation runs all of them, in registration order, chaining the
output of one into the next.

Contents
    - ``EnrichmentRegistry``: append-only, lock-guarded list of functions.
    - ``default_registry`` / ``register_enrichment``: process-wide instance.
    - ``enrich_from_value``: factory for the common "copy a context value into
      a field" enrichment.

System Role
-----------
:class:`lib_context_log.application.logger.ContextLogger` reads a snapshot of a
registry on every derivation. Registration replaces the snapshot under a lock,
so readers never observe a half-appended list and never need to lock.
"""

from __future__ import annotations

import threading
from typing import Any, Final, Iterator

from ..domain.context import Context
from ..observability import log_debug, make_event
from .ports import EnrichmentFunc, Enricher, Entry


class EnrichmentRegistry:
    """Append-only sequence of :data:`EnrichmentFunc` values.

    There is no removal and no de-duplication: registering the same function
    twice runs it twice. Register during initialisation; late registrations are
    safe but only affect derivations that start afterwards.

    Examples
    --------
    >>> registry = EnrichmentRegistry()
    >>> @registry.register
    ... def service(ctx, entry):
    ...     return entry.with_field("service", "api")
    >>> len(registry), registry.snapshot()[0] is service
    (1, True)
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._funcs: tuple[EnrichmentFunc, ...] = ()

    def register(self, fn: EnrichmentFunc) -> EnrichmentFunc:
        """Append *fn* and return it unchanged (usable as a decorator)."""

        with self._lock:
            self._funcs = (*self._funcs, fn)
            count = len(self._funcs)
        log_debug(
            "enrichment_registered",
            **make_event("enrichment", {"function": getattr(fn, "__qualname__", repr(fn)), "registered": count}),
        )
        return fn

    def snapshot(self) -> tuple[EnrichmentFunc, ...]:
        """Return the functions registered so far, in order."""

        return self._funcs

    def __len__(self) -> int:
        return len(self._funcs)

    def __iter__(self) -> Iterator[EnrichmentFunc]:
        return iter(self._funcs)


_DEFAULT_REGISTRY: EnrichmentRegistry = EnrichmentRegistry()


def default_registry() -> EnrichmentRegistry:
    """Return the process-wide registry used by loggers built without one."""

    return _DEFAULT_REGISTRY


def register_enrichment(fn: EnrichmentFunc) -> EnrichmentFunc:
    """Append *fn* to the process-wide registry."""

    return default_registry().register(fn)


_ABSENT: Final = object()


def enrich_from_value(field: str, key: Any) -> EnrichmentFunc:
    """Build an enrichment that copies ``ctx.value(key)`` into *field*.

    Contexts that do not bind *key* leave the entry untouched.

    Examples
    --------
    >>> from lib_context_log.domain.context import BACKGROUND
    >>> from lib_context_log.core import using_adapter
    >>> from lib_context_log.testing import RecordingAdapter
    >>> registry = EnrichmentRegistry()
    >>> _ = registry.register(enrich_from_value("trace_id", "trace"))
    >>> adapter = RecordingAdapter()
    >>> log = using_adapter(adapter, registry=registry)
    >>> log.with_context(BACKGROUND.with_value("trace", "t-1")).info("hello")
    >>> adapter.records[-1].fields
    {'trace_id': 't-1'}
    """

    def enrich(ctx: Context, entry: Enricher) -> Entry:
        value = ctx.value(key, _ABSENT)
        if value is _ABSENT:
            return entry  # type: ignore[return-value]
        return entry.with_field(field, value)

    enrich.__qualname__ = f"enrich_from_value({field!r})"
    return enrich
