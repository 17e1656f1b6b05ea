# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import time

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..utils.context import get_probe_context
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper; safe to share between threads."""

    def __init__(self, settings: ProbeSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_probe_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def _resolve_timeout(self, request: HttpRequest) -> float:
        if request.timeout is not None:
            return request.timeout
        context_timeout = get_probe_context().timeout
        return context_timeout if context_timeout is not None else self.settings.timeout

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = request.header_items()
        if not request.header_values("User-Agent"):
            headers.append(("User-Agent", self.settings.user_agent))
        follow_redirects = request.allow_redirects
        if follow_redirects is None:
            follow_redirects = self.settings.allow_redirects

        try:
            max_body_bytes = self.settings.max_body_bytes
            if max_body_bytes <= 0:
                max_body_bytes = ProbeSettings.max_body_bytes

            started = time.monotonic()
            with self._client.stream(
                request.method.value,
                request.url,
                headers=headers,
                content=request.body,
                timeout=self._resolve_timeout(request),
                follow_redirects=follow_redirects,
            ) as resp:
                content = bytearray()
                truncated = False
                for chunk in resp.iter_bytes():
                    if not chunk:
                        continue
                    remaining = max_body_bytes - len(content)
                    if remaining <= 0:
                        truncated = True
                        break
                    if len(chunk) > remaining:
                        content.extend(chunk[:remaining])
                        truncated = True
                        break
                    content.extend(chunk)

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers=dict(resp.headers),
                text=text,
                content=bytes(content),
                url=str(resp.url),
                meta={
                    "body_truncated": truncated,
                    "body_bytes_read": len(content),
                    "elapsed_ms": round((time.monotonic() - started) * 1000, 3),
                },
            )
        except Exception as exc:  # noqa: BLE001
            return HttpResponse(
                ok=False,
                error_message=str(exc),
                error_type=type(exc).__name__,
            )

    def close(self) -> None:
        self._client.close()
