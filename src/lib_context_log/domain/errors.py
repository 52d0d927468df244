"""Domain-level exception hierarchy.

Purpose
-------
Expose the small error taxonomy of ``lib_context_log``. Logging calls never
raise these; they are confined to configuration parsing so a misconfigured
process fails at start-up rather than on its first log line.

Contents
--------
* :class:`ContextLogError` – umbrella base class for all library errors.
* :class:`InvalidLevel` – a textual level could not be parsed.
* :class:`InvalidSettings` – configuration values are malformed.

System Role
-----------
Raised by :meth:`lib_context_log.domain.levels.Level.parse` and the environment
settings adapter. The CLI surfaces them through ``lib_cli_exit_tools``.
"""

from __future__ import annotations


class ContextLogError(Exception):
    """Base type for all exceptions emitted by ``lib_context_log``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidLevel(ContextLogError, ValueError):
    """Raised when text does not name a declared :class:`Level`.

    Why
    ----
    Subclasses :class:`ValueError` as well so Click option callbacks and plain
    ``except ValueError`` blocks keep working.
    """


class InvalidSettings(ContextLogError):
    """Signifies that logging settings were syntactically or semantically wrong.

    Typical Sources
    ---------------
    Environment variables such as ``LIB_CONTEXT_LOG_LEVEL=loud``.
    """
