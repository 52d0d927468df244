"""Attach execution contexts to exceptions and recover them later.

Purpose
-------
Let code that creates or annotates an error remember the :class:`Context` it
happened in, so a log call made far away (with a different ambient context) can
still enrich the entry as if it were logged at the origin.

Contents
--------
* :class:`ContextualError` – exception wrapper carrying a context.
* :func:`attach` – wrap an error with a context.
* :func:`recover` – find the context attached to an error, or a default.

System Role
-----------
Producers call :func:`attach`; :class:`lib_context_log.application.logger.ContextLogger`
calls :func:`recover` when logging errors or formatting arguments that include
errors. Both functions are pure; the wrapped error is never mutated.
"""

from __future__ import annotations

from .context import Context


class ContextualError(Exception):
    """An exception carrying the :class:`Context` it originated in.

    The wrapped error is stored as ``__cause__`` so tracebacks show the real
    failure, and ``str()`` is delegated to it so messages read unchanged.

    Examples
    --------
    >>> from lib_context_log.domain.context import BACKGROUND
    >>> ctx = BACKGROUND.with_value("request_id", "r-1")
    >>> err = attach(ctx, KeyError("missing"))
    >>> str(err), err.context is ctx
    ("'missing'", True)
    """

    def __init__(self, context: Context, error: BaseException) -> None:
        super().__init__(error)
        self.context = context
        self.error = error
        self.__cause__ = error

    def __str__(self) -> str:
        return str(self.error)


def attach(context: Context, error: BaseException) -> ContextualError:
    """Return *error* wrapped so that it carries *context*."""

    return ContextualError(context, error)


def recover(default: Context, error: object) -> Context:
    """Return the context attached to *error*, or *default* when there is none.

    The error itself is inspected first, then its ``__cause__`` and
    ``__context__`` chain; the first :class:`ContextualError` found wins.
    ``raise ... from None`` cuts the chain, as it does for tracebacks.

    Examples
    --------
    >>> from lib_context_log.domain.context import BACKGROUND
    >>> ctx = BACKGROUND.with_value("k", 1)
    >>> recover(BACKGROUND, attach(ctx, ValueError("x"))) is ctx
    True
    >>> recover(BACKGROUND, ValueError("x")) is BACKGROUND
    True
    """

    seen: set[int] = set()
    current = error if isinstance(error, BaseException) else None
    while current is not None and id(current) not in seen:
        if isinstance(current, ContextualError):
            return current.context
        seen.add(id(current))
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__
    return default
