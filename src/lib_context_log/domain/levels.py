"""Severity levels shared by loggers, entries, and adapters.

Purpose
-------
Define the closed, totally ordered set of severities understood by the library.
Lower values are more severe; ``TRACE`` is the most verbose.

Contents
--------
* :class:`Level` – ``IntEnum`` of the six supported severities.
* :func:`level_name` – display name for any integer, never raising.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

from .errors import InvalidLevel


class Level(IntEnum):
    """Ordered severity of a log entry.

    ``FATAL`` entries terminate the process after emission. There is no
    ``PANIC`` level; ``FATAL`` is the most severe.

    Examples
    --------
    >>> Level.FATAL < Level.ERROR < Level.TRACE
    True
    >>> str(Level.WARN)
    'Warn'
    """

    FATAL = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]

    def enables(self, other: int) -> bool:
        """Return ``True`` when a threshold of ``self`` lets *other* through.

        Examples
        --------
        >>> Level.INFO.enables(Level.ERROR), Level.INFO.enables(Level.DEBUG)
        (True, False)
        """

        return int(other) <= int(self)

    @classmethod
    def parse(cls, text: str | int) -> "Level":
        """Return the level named by *text* (case-insensitive).

        Accepts display names, the stdlib aliases ``warning`` and ``critical``,
        and the decimal value of a declared level.

        Raises
        ------
        InvalidLevel
            When *text* does not identify a declared level.

        Examples
        --------
        >>> Level.parse("debug"), Level.parse("WARNING"), Level.parse("0")
        (<Level.DEBUG: 4>, <Level.WARN: 2>, <Level.FATAL: 0>)
        """

        if isinstance(text, bool):
            raise InvalidLevel(f"Unknown level: {text!r}")
        if isinstance(text, int):
            try:
                return cls(text)
            except ValueError as exc:
                raise InvalidLevel(f"Unknown level: {level_name(text)}") from exc
        candidate = text.strip().lower()
        if candidate.lstrip("-").isdigit():
            return cls.parse(int(candidate))
        try:
            return _ALIASES[candidate]
        except KeyError as exc:
            raise InvalidLevel(f"Unknown level: {text!r}") from exc


_DISPLAY_NAMES: Final[dict[Level, str]] = {
    Level.FATAL: "Fatal",
    Level.ERROR: "Error",
    Level.WARN: "Warn",
    Level.INFO: "Info",
    Level.DEBUG: "Debug",
    Level.TRACE: "Trace",
}

_ALIASES: Final[dict[str, Level]] = {
    **{name.lower(): level for level, name in _DISPLAY_NAMES.items()},
    "warning": Level.WARN,
    "critical": Level.FATAL,
}


def level_name(value: int) -> str:
    """Return the display name for *value*, falling back to ``<invalid (N)>``.

    Examples
    --------
    >>> level_name(Level.INFO), level_name(-1)
    ('Info', '<invalid (-1)>')
    """

    try:
        return _DISPLAY_NAMES[Level(value)]
    except ValueError:
        return f"<invalid ({value})>"
