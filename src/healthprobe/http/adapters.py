# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapters to plug other send implementations into the HttpClient protocol."""

from __future__ import annotations

import threading
from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class CallableHttpClient(HttpClient):
    """
    Adapter for a plain ``send(request) -> HttpResponse`` function.

    Exceptions raised by the function propagate; probes turn them into Unhealthy verdicts.
    """

    def __init__(self, send: Callable[[HttpRequest], HttpResponse]):
        self._send = send

    def request(self, request: HttpRequest) -> HttpResponse:
        return self._send(request)

    def close(self) -> None:
        return None


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests and dry runs."""

    def __init__(self, responses: dict[str, HttpResponse | BaseException] | None = None):
        self._responses = responses or {}
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | BaseException) -> None:
        self._responses[url] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        stubbed = self._responses.get(request.url)
        if isinstance(stubbed, BaseException):
            raise stubbed
        if stubbed is not None:
            return stubbed
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    def close(self) -> None:
        self.closed = True
