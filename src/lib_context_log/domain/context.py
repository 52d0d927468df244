"""Immutable execution context carrying ambient values through a call tree.

Purpose
-------
Give loggers something explicit to bind to. A :class:`Context` is a chain of
``(key, value)`` nodes; deriving a child never mutates the parent, so a context
can be shared freely between threads and tasks.

Contents
--------
* :class:`Context` – frozen node with ``with_value`` / ``value`` lookups.
* :data:`BACKGROUND` – the empty root context.

System Role
-----------
Enrichment functions read values out of a context, the context carrier stores a
logger in one, and the error-context facility attaches one to an exception.
Contexts compare by identity: recovery decides whether an error carries a
*different* context with ``is``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

_MISSING: Final = object()


@dataclass(frozen=True, slots=True, eq=False)
class Context:
    """One link in an immutable chain of ambient values.

    Examples
    --------
    >>> root = Context.background()
    >>> child = root.with_value("trace_id", "abc")
    >>> child.value("trace_id"), root.value("trace_id")
    ('abc', None)
    >>> "trace_id" in child, child is root
    (True, False)
    """

    parent: Context | None = None
    key: Any = _MISSING
    bound: Any = None

    @staticmethod
    def background() -> Context:
        """Return the shared empty root context."""

        return BACKGROUND

    def with_value(self, key: Any, value: Any) -> Context:
        """Return a child context binding *key* to *value*."""

        return Context(self, key, value)

    def value(self, key: Any, default: Any = None) -> Any:
        """Return the nearest value bound to *key*, or *default*."""

        node: Context | None = self
        while node is not None:
            if node.key is not _MISSING and node.key == key:
                return node.bound
            node = node.parent
        return default

    def __contains__(self, key: object) -> bool:
        return self.value(key, _MISSING) is not _MISSING

    def __repr__(self) -> str:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return f"Context(depth={depth})"


BACKGROUND: Final[Context] = Context()
"""Root context with no bound values; the default for new loggers."""
