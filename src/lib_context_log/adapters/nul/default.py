"""Adapter that discards everything."""

from __future__ import annotations

from typing import Any

from ...domain.levels import Level


class NulAdapter:
    """Emit nothing; every copy is the same instance."""

    __slots__ = ()

    def emit(self, level: Level, message: str) -> None:
        return None

    def new_entry(self) -> NulAdapter:
        return self

    def with_field(self, name: str, value: Any) -> NulAdapter:
        return self
