from __future__ import annotations

import pytest

from lib_context_log.domain.levels import Level
from lib_context_log.domain.settings import DEFAULT_LOGGER_NAME, DEFAULT_SETTINGS, LogSettings


def test_defaults() -> None:
    assert DEFAULT_SETTINGS.threshold is Level.TRACE
    assert DEFAULT_SETTINGS.logger_name == DEFAULT_LOGGER_NAME
    assert dict(DEFAULT_SETTINGS.fields) == {}


def test_fields_are_frozen_copies() -> None:
    source = {"service": "api"}
    settings = LogSettings(fields=source)
    source["service"] = "changed"
    assert settings.fields["service"] == "api"
    with pytest.raises(TypeError):
        settings.fields["service"] = "mutated"  # type: ignore[index]
