# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction: the single "send request, get response" capability probes use."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse

SendFunction = Callable[[HttpRequest], HttpResponse]


class HttpClient(Protocol):
    """Minimal protocol for issuing HTTP requests."""

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_http_client(settings: ProbeSettings | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_probe_settings())


def ensure_http_client(client: HttpClient | SendFunction) -> HttpClient:
    """Accept either an HttpClient or a bare send function and return an HttpClient."""
    if callable(getattr(client, "request", None)):
        return client  # type: ignore[return-value]
    if callable(client):
        from .adapters import CallableHttpClient

        return CallableHttpClient(client)
    raise TypeError(f"Expected an HttpClient or a send function, got {type(client).__name__}")
