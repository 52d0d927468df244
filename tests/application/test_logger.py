"""Behaviour of :class:`ContextLogger`: emission, derivation, and error-context recovery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_context_log.application.enrichment import EnrichmentRegistry, enrich_from_value
from lib_context_log.application.logger import ContextLogger, render
from lib_context_log.application.termination import exit_hook
from lib_context_log.core import using_adapter
from lib_context_log.domain.context import BACKGROUND
from lib_context_log.domain.errorcontext import attach
from lib_context_log.domain.levels import Level
from lib_context_log.testing import Emission, RecordingAdapter

LEVEL_METHODS: list[tuple[str, Level]] = [
    ("trace", Level.TRACE),
    ("debug", Level.DEBUG),
    ("info", Level.INFO),
    ("warn", Level.WARN),
    ("error", Level.ERROR),
    ("fatal", Level.FATAL),
]


def _logger(adapter: RecordingAdapter, registry: EnrichmentRegistry) -> ContextLogger:
    return using_adapter(adapter, registry=registry)


@pytest.mark.parametrize(("method", "level"), LEVEL_METHODS)
def test_plain_message_emits_once_at_level(
    method: str, level: Level, recorder: RecordingAdapter, registry: EnrichmentRegistry, exit_codes: list[int]
) -> None:
    getattr(_logger(recorder, registry), method)("test")
    assert recorder.records == [Emission(level, "test", {})]


@pytest.mark.parametrize(("method", "level"), LEVEL_METHODS)
def test_formatted_message(
    method: str, level: Level, recorder: RecordingAdapter, registry: EnrichmentRegistry, exit_codes: list[int]
) -> None:
    getattr(_logger(recorder, registry), method)("formatted: %s", "test")
    assert recorder.records == [Emission(level, "formatted: test", {})]


def test_errorf_formats_numbers(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    _logger(recorder, registry).error("x=%d", 5)
    assert recorder.messages() == ["x=5"]


def test_plain_message_is_not_formatted(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    _logger(recorder, registry).info("100% done")
    assert recorder.messages() == ["100% done"]


def test_malformed_format_does_not_raise(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    _logger(recorder, registry).warn("x=%d", "five")
    assert recorder.messages() == ["x=%d ('five',)"]


@pytest.mark.parametrize(
    ("value", "message"),
    [
        (ValueError("boom"), "boom"),
        (KeyError("key"), "'key'"),
        (RuntimeError(), "RuntimeError"),
        ("plain text", "plain text"),
        (42, "42"),
    ],
)
def test_error_value_rendering(
    value: object, message: str, recorder: RecordingAdapter, registry: EnrichmentRegistry
) -> None:
    _logger(recorder, registry).error(value)
    assert recorder.records == [Emission(Level.ERROR, message, {})]


def test_fatal_emits_before_terminating(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    observed: list[tuple[int, int]] = []

    def hook(code: int) -> None:
        observed.append((code, len(recorder.records)))

    with exit_hook(hook):  # type: ignore[arg-type]
        _logger(recorder, registry).fatal("x")

    assert observed == [(1, 1)]
    assert recorder.records == [Emission(Level.FATAL, "x", {})]


def test_fatal_variants_exit_with_one(
    recorder: RecordingAdapter, registry: EnrichmentRegistry, exit_codes: list[int]
) -> None:
    log = _logger(recorder, registry)
    log.fatal("a")
    log.fatal("b=%d", 2)
    log.fatal_error(ValueError("c"))
    assert recorder.messages() == ["a", "b=2", "c"]
    assert all(record.level is Level.FATAL for record in recorder.records)
    assert exit_codes == [1, 1, 1]


def test_non_fatal_levels_never_exit(
    recorder: RecordingAdapter, registry: EnrichmentRegistry, exit_codes: list[int]
) -> None:
    log = _logger(recorder, registry)
    log.error(ValueError("x"))
    log.error("y=%s", 1)
    log.warn("z")
    assert exit_codes == []


def test_default_exit_hook_raises_system_exit(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _logger(recorder, registry).fatal("bye")
    assert excinfo.value.code == 1
    assert recorder.messages() == ["bye"]


# -- with_field -------------------------------------------------------------


def test_with_field_returns_new_entry(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    original = _logger(recorder, registry)
    enriched = original.with_field("user", "ada")

    assert enriched is not original
    original.info("plain")
    enriched.info("rich")

    assert recorder.records == [
        Emission(Level.INFO, "plain", {}),
        Emission(Level.INFO, "rich", {"user": "ada"}),
    ]
    assert dict(original.fields) == {}
    assert enriched.context is original.context


def test_with_fields_adds_each_keyword(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    _logger(recorder, registry).with_fields(a=1, b=2).info("x")
    assert recorder.records[-1].fields == {"a": 1, "b": 2}


def test_fields_cannot_be_mutated(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    entry = _logger(recorder, registry).with_field("k", "v")
    with pytest.raises(TypeError):
        entry.fields["k"] = "changed"  # type: ignore[index]


@given(st.dictionaries(st.text(min_size=1, max_size=8), st.integers(), max_size=6))
def test_chained_fields_reach_adapter(fields: dict[str, int]) -> None:
    adapter = RecordingAdapter()
    entry = using_adapter(adapter, registry=EnrichmentRegistry())
    for name, value in fields.items():
        entry = entry.with_field(name, value)
    entry.info("m")
    assert adapter.records[-1].fields == fields


# -- derivation -------------------------------------------------------------


def test_derivations_are_distinct(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    registry.register(enrich_from_value("trace_id", "trace"))
    ctx = BACKGROUND.with_value("trace", "t-1")
    log = _logger(recorder, registry)

    a = log.with_context(ctx)
    b = log.with_context(ctx)
    assert a is not b
    assert a != b

    a.with_field("only", "a").info("from a")
    b.info("from b")
    assert recorder.records == [
        Emission(Level.INFO, "from a", {"trace_id": "t-1", "only": "a"}),
        Emission(Level.INFO, "from b", {"trace_id": "t-1"}),
    ]


def test_new_entry_uses_own_context(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    registry.register(enrich_from_value("tenant", "tenant"))
    ctx = BACKGROUND.with_value("tenant", "acme")
    entry = _logger(recorder, registry).with_context(ctx)
    fresh = entry.new_entry()
    assert fresh is not entry
    assert fresh.context is ctx
    fresh.info("x")
    assert recorder.records[-1].fields == {"tenant": "acme"}


def test_enrichment_runs_once_per_derivation_in_order(
    recorder: RecordingAdapter, registry: EnrichmentRegistry
) -> None:
    calls: list[str] = []

    def make(name: str) -> Callable[..., Any]:
        def enrich(ctx, entry):
            calls.append(name)
            return entry.with_field(name, len(calls))

        return enrich

    for name in ("first", "second", "third"):
        registry.register(make(name))

    _logger(recorder, registry).info("x")
    assert calls == ["first", "second", "third"]
    assert recorder.records[-1].fields == {"first": 1, "second": 2, "third": 3}


def test_enrichment_receives_active_context(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    seen: list[object] = []

    def enrich(ctx, entry):
        seen.append(ctx)
        return entry

    registry.register(enrich)
    ctx = BACKGROUND.with_value("k", "v")
    _logger(recorder, registry).with_context(ctx).info("x")
    assert seen and all(item is ctx for item in seen)


def test_enrichment_chains_outputs(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    received: list[object] = []

    def first(ctx, entry):
        return entry.with_field("step", 1)

    def second(ctx, entry):
        received.append(entry)
        return entry.with_field("step", 2)

    registry.register(first)
    registry.register(second)
    _logger(recorder, registry).info("x")
    assert recorder.records[-1].fields == {"step": 2}
    assert dict(received[-1].fields) == {"step": 1}


def test_enrichment_may_substitute_entry(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    other = RecordingAdapter()
    replacement = using_adapter(other, registry=EnrichmentRegistry()).with_field("sink", "other")

    registry.register(lambda ctx, entry: replacement)
    _logger(recorder, registry).info("redirected")

    assert recorder.records == []
    assert other.records == [Emission(Level.INFO, "redirected", {"sink": "other"})]


def test_one_off_fields_are_never_shadowed(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    registry.register(lambda ctx, entry: entry.with_field("user", "from-pipeline"))
    log = _logger(recorder, registry)

    log.info("pipeline only")
    log.with_field("user", "explicit").info("override")
    log.with_field("user", "explicit").with_context(BACKGROUND.with_value("x", 1)).info("rebound")

    assert [r.fields["user"] for r in recorder.records] == ["from-pipeline", "explicit", "explicit"]


def test_registration_affects_later_derivations(
    recorder: RecordingAdapter, registry: EnrichmentRegistry
) -> None:
    log = _logger(recorder, registry)
    log.info("before")
    registry.register(lambda ctx, entry: entry.with_field("late", True))
    log.info("after")
    assert recorder.records[0].fields == {}
    assert recorder.records[1].fields == {"late": True}


def test_default_registry_is_resolved_lazily(
    recorder: RecordingAdapter, default_registry: EnrichmentRegistry
) -> None:
    log = using_adapter(recorder)
    default_registry.register(lambda ctx, entry: entry.with_field("global", 1))
    log.info("x")
    assert recorder.records[-1].fields == {"global": 1}


# -- error-context recovery ---------------------------------------------------


@pytest.fixture()
def request_logger(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> ContextLogger:
    registry.register(enrich_from_value("request_id", "request_id"))
    ambient = BACKGROUND.with_value("request_id", "ambient")
    return using_adapter(recorder, ambient, registry=registry)


def test_formatted_error_recovers_origin_context(
    request_logger: ContextLogger, recorder: RecordingAdapter
) -> None:
    origin = BACKGROUND.with_value("request_id", "origin")
    error = attach(origin, ValueError("boom"))

    request_logger.error("msg: %s", error)

    assert recorder.records == [Emission(Level.ERROR, "msg: boom", {"request_id": "origin"})]


@pytest.mark.parametrize("method", ["trace", "debug", "info", "warn", "fatal"])
def test_every_formatted_level_recovers(
    method: str, request_logger: ContextLogger, recorder: RecordingAdapter, exit_codes: list[int]
) -> None:
    origin = BACKGROUND.with_value("request_id", "origin")
    getattr(request_logger, method)("failed: %s", attach(origin, ValueError("x")))
    assert recorder.records[-1].fields == {"request_id": "origin"}
    assert recorder.records[-1].message == "failed: x"


def test_only_first_differing_context_is_honoured(
    request_logger: ContextLogger, recorder: RecordingAdapter
) -> None:
    first = attach(BACKGROUND.with_value("request_id", "c1"), ValueError("one"))
    second = attach(BACKGROUND.with_value("request_id", "c2"), ValueError("two"))

    request_logger.error("%s / %s", first, second)

    assert recorder.records == [Emission(Level.ERROR, "one / two", {"request_id": "c1"})]


def test_errors_without_context_are_skipped(request_logger: ContextLogger, recorder: RecordingAdapter) -> None:
    later = attach(BACKGROUND.with_value("request_id", "later"), ValueError("b"))
    request_logger.info("%s %s %s", "text", ValueError("a"), later)
    assert recorder.records[-1].fields == {"request_id": "later"}


def test_error_carrying_same_context_keeps_entry(
    request_logger: ContextLogger, recorder: RecordingAdapter
) -> None:
    same = attach(request_logger.context, ValueError("same"))
    assert request_logger._entry_from_args((same,)) is request_logger
    assert request_logger._entry_from_args(("x", 1)) is request_logger
    assert request_logger._entry_from_args(()) is request_logger


def test_recovery_keeps_one_off_fields(request_logger: ContextLogger, recorder: RecordingAdapter) -> None:
    origin = BACKGROUND.with_value("request_id", "origin")
    request_logger.with_field("job", "sync").warn("retry: %s", attach(origin, OSError("timeout")))
    assert recorder.records[-1].fields == {"request_id": "origin", "job": "sync"}


def test_error_value_always_recovers(request_logger: ContextLogger, recorder: RecordingAdapter) -> None:
    origin = BACKGROUND.with_value("request_id", "origin")
    request_logger.error(attach(origin, ValueError("boom")))
    request_logger.error(ValueError("plain"))
    assert recorder.records == [
        Emission(Level.ERROR, "boom", {"request_id": "origin"}),
        Emission(Level.ERROR, "plain", {"request_id": "ambient"}),
    ]


def test_fatal_error_recovers_and_exits(
    request_logger: ContextLogger, recorder: RecordingAdapter, exit_codes: list[int]
) -> None:
    origin = BACKGROUND.with_value("request_id", "origin")
    request_logger.fatal_error(attach(origin, ValueError("boom")))
    assert recorder.records == [Emission(Level.FATAL, "boom", {"request_id": "origin"})]
    assert exit_codes == [1]


# -- render -------------------------------------------------------------------


def test_render_uses_mapping_argument() -> None:
    assert render("%(user)s logged in", ({"user": "ada"},)) == "ada logged in"


def test_render_extra_arguments_fall_back() -> None:
    assert render("no placeholders", (1,)) == "no placeholders (1,)"


def test_rebinding_refreshes_pipeline_fields(request_logger: ContextLogger, recorder: RecordingAdapter) -> None:
    first = request_logger.with_context(BACKGROUND.with_value("request_id", "r-1"))
    second = first.with_context(BACKGROUND.with_value("request_id", "r-2"))
    first.info("one")
    second.info("two")
    assert [r.fields["request_id"] for r in recorder.records] == ["r-1", "r-2"]
    assert dict(second.fields) == {}


@dataclass(frozen=True, slots=True, eq=False)
class _ComponentLogger(ContextLogger):
    component: str = "billing"


def test_subclass_survives_derivation(recorder: RecordingAdapter, registry: EnrichmentRegistry) -> None:
    registry.register(enrich_from_value("request_id", "request_id"))
    log = _ComponentLogger(BACKGROUND, recorder, registry=registry, component="api")
    derived = log.with_field("user", "ada").with_context(BACKGROUND.with_value("request_id", "r-7"))
    assert type(derived) is _ComponentLogger
    assert derived.component == "api"
    assert type(derived.new_entry()) is _ComponentLogger
    derived.info("kept")
    assert recorder.records == [Emission(Level.INFO, "kept", {"request_id": "r-7", "user": "ada"})]
