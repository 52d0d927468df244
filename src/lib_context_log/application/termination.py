"""Replaceable process termination used by ``FATAL`` logging paths.

Purpose
-------
Fatal log calls end the process, but tests and embedding hosts (a service that
wants a controlled shutdown) must be able to intercept that. Every fatal path
goes through :func:`terminate`, which calls the current hook.

Contents
    - ``terminate``: invoke the current hook with an exit status.
    - ``get_exit_hook`` / ``set_exit_hook``: read or swap the hook.
    - ``exit_hook``: context manager swapping the hook for a block.

The default hook is :func:`sys.exit`, which raises :class:`SystemExit` so
``atexit`` callbacks run and logging handlers flush before the interpreter
stops.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator

from ..observability import log_debug, make_event
from .ports import ExitHook

_EXIT_HOOK: ExitHook = sys.exit


def get_exit_hook() -> ExitHook:
    """Return the hook fatal paths currently call."""

    return _EXIT_HOOK


def set_exit_hook(hook: ExitHook) -> ExitHook:
    """Install *hook* and return the previous one so callers can restore it."""

    global _EXIT_HOOK
    previous = _EXIT_HOOK
    _EXIT_HOOK = hook
    log_debug("exit_hook_replaced", **make_event("termination", {"hook": getattr(hook, "__qualname__", repr(hook))}))
    return previous


@contextmanager
def exit_hook(hook: ExitHook) -> Iterator[ExitHook]:
    """Use *hook* for the duration of the ``with`` block.

    Examples
    --------
    >>> codes = []
    >>> with exit_hook(codes.append):
    ...     terminate(1)
    >>> codes
    [1]
    """

    previous = set_exit_hook(hook)
    try:
        yield hook
    finally:
        set_exit_hook(previous)


def terminate(code: int) -> None:
    """Call the current exit hook with *code*."""

    _EXIT_HOOK(code)
