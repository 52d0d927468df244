"""Settings value object for the standard-library backend.

Purpose
-------
Capture the handful of knobs the composition root needs when building a
stdlib-backed logger, independent of where they were read from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final, Mapping

from .levels import Level

DEFAULT_LOGGER_NAME: Final[str] = "lib_context_log.app"


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Immutable configuration for :func:`lib_context_log.core.std_log`.

    Attributes
    ----------
    threshold:
        Most verbose level the adapter emits; anything more verbose is dropped.
    logger_name:
        Name of the :mod:`logging` logger that receives rendered lines.
    fields:
        Static fields stamped onto every entry (service name, host, ...).

    Examples
    --------
    >>> settings = LogSettings(threshold=Level.INFO, fields={"service": "api"})
    >>> settings.fields["service"], settings.logger_name
    ('api', 'lib_context_log.app')
    """

    threshold: Level = Level.TRACE
    logger_name: str = DEFAULT_LOGGER_NAME
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))


DEFAULT_SETTINGS: Final[LogSettings] = LogSettings()
