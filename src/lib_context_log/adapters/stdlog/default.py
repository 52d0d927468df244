"""Standard-library :mod:`logging` adapter.

Purpose
-------
Render entries as single text lines and hand them to a stdlib
:class:`logging.Logger`, so applications keep their existing handler and
formatter configuration.

Key behaviours
--------------
* Lines read ``key=value key2=value2 LEVEL: message`` with keys sorted.
* Keys or values containing a space are double-quoted.
* ``TRACE`` is registered with :mod:`logging` as level 5; ``FATAL`` maps to
  ``CRITICAL``.
* The raw fields also travel as ``extra={"context": {...}}`` for structured
  handlers.
* Levels more verbose than ``threshold`` are dropped before any formatting.
"""

from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import Any, Final, Mapping

from ...domain.levels import Level

TRACE_LEVEL_NUM: Final[int] = 5
logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")

_LOGGING_LEVELS: Final[dict[Level, int]] = {
    Level.TRACE: TRACE_LEVEL_NUM,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.FATAL: logging.CRITICAL,
}

_PREFIXES: Final[dict[Level, str]] = {level: level.name for level in Level}

DEFAULT_LOGGER: Final[logging.Logger] = logging.getLogger("lib_context_log.app")


class StdLogAdapter:
    """Adapter writing to a stdlib logger.

    Examples
    --------
    >>> adapter = StdLogAdapter().with_field("user", "ada").with_field("op", "log in")
    >>> adapter.render(Level.INFO, "hello")
    'op="log in" user=ada INFO: hello'
    """

    __slots__ = ("_logger", "_fields", "_threshold")

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        fields: Mapping[str, Any] | None = None,
        threshold: Level = Level.TRACE,
    ) -> None:
        self._logger = logger if logger is not None else DEFAULT_LOGGER
        self._fields: Mapping[str, Any] = MappingProxyType(dict(fields or {}))
        self._threshold = threshold

    @property
    def fields(self) -> Mapping[str, Any]:
        """Fields accumulated so far (read-only)."""

        return self._fields

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def threshold(self) -> Level:
        return self._threshold

    def emit(self, level: Level, message: str) -> None:
        if not self._threshold.enables(level):
            return
        self._logger.log(
            _LOGGING_LEVELS.get(level, logging.ERROR),
            self.render(level, message),
            extra={"context": dict(self._fields)},
        )

    def new_entry(self) -> StdLogAdapter:
        return StdLogAdapter(self._logger, fields=self._fields, threshold=self._threshold)

    def with_field(self, name: str, value: Any) -> StdLogAdapter:
        return StdLogAdapter(self._logger, fields={**self._fields, name: value}, threshold=self._threshold)

    def render(self, level: Level, message: str) -> str:
        """Return the text line :meth:`emit` would log."""

        return f"{self._field_data()}{_PREFIXES.get(level, 'INVALID')}: {message}"

    def _field_data(self) -> str:
        return "".join(f"{_quote(key)}={_quote(str(self._fields[key]))} " for key in sorted(self._fields))


def _quote(text: str) -> str:
    """Double-quote *text* when it contains a space.

    Examples
    --------
    >>> _quote("plain"), _quote("two words")
    ('plain', '"two words"')
    """

    if " " in text:
        return json.dumps(text, ensure_ascii=False)
    return text
