# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header helpers.

Request headers are declared as name -> values and attached without value validation; the
transport decides whether it accepts them. Response headers arrive as plain dicts whose key
casing depends on the client, so lookups are case-insensitive (RFC 9110).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .models import RequestHeaders


def _coerce_values(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)):
        return (value.decode("latin-1") if isinstance(value, bytes) else value,)
    if isinstance(value, Iterable):
        return tuple("" if item is None else str(item) for item in value)
    return (str(value),)


def freeze_headers(headers: Mapping[str, Any] | Iterable[tuple[str, Any]] | None) -> RequestHeaders:
    """
    Convert declared headers into the immutable, ordered form stored on HttpRequest.

    Accepts a mapping or an iterable of pairs; each value may be a single string or a
    sequence of strings. Names keep their casing and declaration order.
    """
    if not headers:
        return ()
    pairs = headers.items() if isinstance(headers, Mapping) else headers
    frozen: list[tuple[str, tuple[str, ...]]] = []
    for key, value in pairs:
        if key is None:
            continue
        frozen.append((str(key), _coerce_values(value)))
    return tuple(frozen)


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a response header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    lower = str(name).lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            value = headers.get(key)
            return default if value is None else str(value).strip()

    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = ["freeze_headers", "header_value"]
