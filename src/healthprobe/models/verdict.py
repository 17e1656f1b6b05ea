# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Health verdict produced by one probe execution."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class HealthState(str, Enum):
    HEALTHY = "Healthy"
    DEGRADED = "Degraded"
    UNHEALTHY = "Unhealthy"


@dataclass(frozen=True)
class Verdict:
    state: HealthState
    description: str = ""
    data: dict[str, Any] = field(default_factory=dict)

    # Immutable fields, mutable data mapping: comparable but not hashable.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        # Own a private copy so callers cannot alias a verdict's data.
        object.__setattr__(self, "state", HealthState(self.state))
        object.__setattr__(self, "data", dict(self.data or {}))

    @classmethod
    def healthy(cls, description: str = "", data: Mapping[str, Any] | None = None) -> Verdict:
        return cls(HealthState.HEALTHY, description, dict(data or {}))

    @classmethod
    def degraded(cls, description: str = "", data: Mapping[str, Any] | None = None) -> Verdict:
        return cls(HealthState.DEGRADED, description, dict(data or {}))

    @classmethod
    def unhealthy(cls, description: str = "", data: Mapping[str, Any] | None = None) -> Verdict:
        return cls(HealthState.UNHEALTHY, description, dict(data or {}))

    @property
    def is_healthy(self) -> bool:
        return self.state == HealthState.HEALTHY

    def with_data(self, entries: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Verdict:
        """Return a copy with ``entries`` merged into data; ``entries`` win on key collisions."""
        merged = dict(self.data)
        merged.update(entries)
        return Verdict(self.state, self.description, merged)

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "description": self.description,
            "data": dict(self.data),
        }


__all__ = ["HealthState", "Verdict"]
