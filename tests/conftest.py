"""Shared fixtures keeping the exit hook and enrichment registry isolated per test."""

from __future__ import annotations

from typing import Iterator

import pytest

from lib_context_log.application import enrichment
from lib_context_log.application.enrichment import EnrichmentRegistry
from lib_context_log.application.termination import get_exit_hook, set_exit_hook
from lib_context_log.testing import RecordingAdapter


@pytest.fixture()
def exit_codes() -> Iterator[list[int]]:
    """Replace the exit hook with one that records codes instead of exiting."""

    codes: list[int] = []
    previous = set_exit_hook(codes.append)  # type: ignore[arg-type]
    try:
        yield codes
    finally:
        set_exit_hook(previous)


@pytest.fixture()
def registry() -> EnrichmentRegistry:
    """Provide a private registry so registrations never leak between tests."""

    return EnrichmentRegistry()


@pytest.fixture()
def default_registry(monkeypatch: pytest.MonkeyPatch) -> EnrichmentRegistry:
    """Swap the process-wide registry for an empty one for the duration of a test."""

    fresh = EnrichmentRegistry()
    monkeypatch.setattr(enrichment, "_DEFAULT_REGISTRY", fresh)
    return fresh


@pytest.fixture()
def recorder() -> RecordingAdapter:
    return RecordingAdapter()


@pytest.fixture(autouse=True)
def _guard_exit_hook() -> Iterator[None]:
    """Fail loudly if a test leaves a replaced exit hook behind."""

    hook = get_exit_hook()
    yield
    assert get_exit_hook() is hook
