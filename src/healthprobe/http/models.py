# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by probes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import unquote, urlsplit

HeaderValues = tuple[str, ...]
RequestHeaders = tuple[tuple[str, HeaderValues], ...]
Headers = dict[str, str]


class HttpMethod(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    @classmethod
    def parse(cls, value: HttpMethod | str | None) -> HttpMethod:
        if value is None:
            return cls.GET
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


@dataclass(frozen=True)
class HttpRequest:
    """
    Immutable request consumed by HttpClient implementations.

    A probe builds one of these at registration time and sends the same instance on
    every execution, so nothing here may be mutated after construction.
    """

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: RequestHeaders = ()
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.parse(self.method))

    @property
    def path(self) -> str:
        """Decoded path component of ``url``."""
        return unquote(urlsplit(self.url).path)

    def header_values(self, name: str) -> HeaderValues:
        """Return every value attached under ``name`` (case-insensitive)."""
        lower = name.lower()
        values: list[str] = []
        for key, items in self.headers:
            if key.lower() == lower:
                values.extend(items)
        return tuple(values)

    def header_items(self) -> list[tuple[str, str]]:
        """Flatten multi-valued headers into (name, value) pairs in declaration order."""
        return [(key, value) for key, items in self.headers for value in items]


@dataclass
class HttpResponse:
    """Normalized HTTP response, or a transport failure when ``ok`` is False without a status."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_transport_failure(self) -> bool:
        return self.status_code is None
