"""Environment variable settings adapter.

Purpose
-------
Build :class:`~lib_context_log.domain.settings.LogSettings` from process
environment variables so deployments can tune the stdlib backend without code
changes.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``), ``LIB_CONTEXT_LOG`` by default.
* Supports ``__`` as a nesting delimiter (``FIELDS__SERVICE`` →
  ``{"fields": {"service": ...}}``).
* Performs light type coercion for common scalar types (bools, ints, floats,
  ``null``/``none``).
* Recognised keys: ``LEVEL`` (threshold), ``LOGGER`` (stdlib logger name) and
  ``FIELDS__<NAME>`` (static fields).
"""

from __future__ import annotations

import os
from typing import Mapping

from ...domain.errors import InvalidLevel, InvalidSettings
from ...domain.levels import Level
from ...domain.settings import DEFAULT_LOGGER_NAME, LogSettings
from ...observability import log_debug, make_event


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-context-log')
    'LIB_CONTEXT_LOG'
    """

    return slug.replace("-", "_").upper()


DEFAULT_PREFIX = default_env_prefix("lib-context-log")


class DefaultEnvLoader:
    """Load environment variables that belong to the settings namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability."""

        self._environ = environ if environ is not None else os.environ

    def load(self, prefix: str = DEFAULT_PREFIX) -> dict[str, object]:
        """Return a nested mapping containing variables with the supplied *prefix*.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'DEMO_FIELDS__PORT': '8080', 'DEMO_LEVEL': 'info'})
        >>> loader.load('DEMO')
        {'fields': {'port': 8080}, 'level': 'info'}
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            assign_nested(collected, stripped, _coerce(value))
        log_debug("env_variables_loaded", **make_event("settings", {"keys": sorted(collected.keys())}))
        return collected

    def settings(self, prefix: str = DEFAULT_PREFIX) -> LogSettings:
        """Return :class:`LogSettings` built from variables under *prefix*.

        Raises
        ------
        InvalidSettings
            When ``LEVEL`` does not name a level or ``FIELDS`` is not a namespace.
        """

        return settings_from_mapping(self.load(prefix))


def settings_from_mapping(data: Mapping[str, object]) -> LogSettings:
    """Convert a loaded namespace into :class:`LogSettings`.

    Examples
    --------
    >>> settings_from_mapping({'level': 'debug', 'fields': {'service': 'api'}}).threshold
    <Level.DEBUG: 4>
    """

    raw_level = data.get("level")
    try:
        threshold = Level.TRACE if raw_level is None else Level.parse(raw_level)  # type: ignore[arg-type]
    except (InvalidLevel, AttributeError) as exc:
        raise InvalidSettings(f"Invalid log level setting: {raw_level!r}") from exc

    fields = data.get("fields", {})
    if not isinstance(fields, Mapping):
        raise InvalidSettings("FIELDS must be set per field, e.g. FIELDS__SERVICE=api")

    logger_name = data.get("logger")
    return LogSettings(
        threshold=threshold,
        logger_name=str(logger_name) if logger_name else DEFAULT_LOGGER_NAME,
        fields=fields,
    )


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign ``value`` inside ``target`` using ``__`` as a nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'FIELDS__REGION', 'eu')
    >>> data
    {'fields': {'region': 'eu'}}
    """

    parts = key.split("__")
    cursor = target
    for part in parts[:-1]:
        cursor = _ensure_child_mapping(cursor, part)
    cursor[_resolve_key(cursor, parts[-1])] = value


def _resolve_key(mapping: dict[str, object], key: str) -> str:
    """Return an existing key that matches ``key`` (case-insensitive) or a new lowercase key."""

    lower = key.lower()
    for existing in mapping.keys():
        if existing.lower() == lower:
            return existing
    return lower


def _ensure_child_mapping(mapping: dict[str, object], key: str) -> dict[str, object]:
    """Ensure ``mapping[key]`` is a ``dict`` (creating or validating as necessary)."""

    resolved = _resolve_key(mapping, key)
    if resolved not in mapping:
        mapping[resolved] = {}
    child = mapping[resolved]
    if not isinstance(child, dict):
        raise InvalidSettings(f"Cannot override scalar with mapping for key {key}")
    return child


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('hello')
    (True, 10, 3.5, 'hello')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        return float(value)
    except ValueError:
        return value
