# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Per-run ambient context.

The aggregating scheduler can wrap one health run in ``probe_context(timeout=...)`` to bound
every send made inside it without touching the prebuilt, shared requests. The context is
ContextVar-backed, so concurrent runs on different threads or tasks do not see each other.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class ProbeContext:
    timeout: float | None = None


_current_probe_context: ContextVar[ProbeContext | None] = ContextVar("healthprobe_probe_context", default=None)


def get_probe_context() -> ProbeContext:
    """Return the current ambient probe context."""
    return _current_probe_context.get() or ProbeContext()


@contextmanager
def probe_context(**overrides: Any) -> Iterator[ProbeContext]:
    """
    Context manager that layers overrides onto the ambient ProbeContext.

    None-valued overrides are ignored to preserve outer context values.
    """
    current = get_probe_context()
    filtered = {key: value for key, value in overrides.items() if value is not None}
    new_context = replace(current, **filtered) if filtered else current
    token = _current_probe_context.set(new_context)
    try:
        yield new_context
    finally:
        _current_probe_context.reset(token)


__all__ = ["ProbeContext", "get_probe_context", "probe_context"]
