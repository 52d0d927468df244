"""Test support: an in-memory adapter and a deterministic failure helper.

Purpose
    Let applications (and this library's own suites) assert on exactly what was
    logged, with which fields, without configuring handlers or parsing text.

Contents
    - ``Emission``: one recorded log line.
    - ``RecordingAdapter``: buffered in-memory sink; copies share one record
      list so every entry derived from a logger reports to the same place.
    - ``FAILURE_MESSAGE`` / ``i_should_fail``: raise a stable error for
      failure-path tests of the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

from .domain.levels import Level

FAILURE_MESSAGE: Final[str] = "i should fail"


@dataclass(frozen=True, slots=True)
class Emission:
    """A single line received by :class:`RecordingAdapter`."""

    level: Level
    message: str
    fields: dict[str, Any] = field(default_factory=dict)


class RecordingAdapter:
    """Adapter that appends an :class:`Emission` per ``emit`` call.

    Examples
    --------
    >>> adapter = RecordingAdapter()
    >>> adapter.with_field("k", "v").emit(Level.WARN, "careful")
    >>> adapter.records
    [Emission(level=<Level.WARN: 2>, message='careful', fields={'k': 'v'})]
    >>> adapter.fields
    {}
    """

    __slots__ = ("records", "_fields")

    def __init__(self, *, records: list[Emission] | None = None, fields: dict[str, Any] | None = None) -> None:
        self.records: list[Emission] = records if records is not None else []
        self._fields: dict[str, Any] = dict(fields or {})

    @property
    def fields(self) -> dict[str, Any]:
        """Copy of the fields accumulated by this adapter."""

        return dict(self._fields)

    def emit(self, level: Level, message: str) -> None:
        self.records.append(Emission(level, message, dict(self._fields)))

    def new_entry(self) -> RecordingAdapter:
        return RecordingAdapter(records=self.records, fields=self._fields)

    def with_field(self, name: str, value: Any) -> RecordingAdapter:
        return RecordingAdapter(records=self.records, fields={**self._fields, name: value})

    def messages(self) -> list[str]:
        """Return the recorded messages in emission order."""

        return [record.message for record in self.records]

    def clear(self) -> None:
        """Forget everything recorded so far."""

        self.records.clear()


def i_should_fail() -> None:
    """Raise a deterministic :class:`RuntimeError` for failure-path testing.

    Examples
    --------
    >>> i_should_fail()
    Traceback (most recent call last):
    ...
    RuntimeError: i should fail
    """

    raise RuntimeError(FAILURE_MESSAGE)
