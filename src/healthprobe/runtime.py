# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade that registers probes against one shared HTTP client."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from contextlib import suppress
from http import HTTPStatus
from typing import Any

from .config import ProbeSettings, load_probe_settings
from .errors import InvalidConfiguration
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpMethod
from .models.probe import Annotation, Refine, RequestBuilder
from .models.verdict import Verdict
from .probe.executor import HttpEndpointProbe
from .registry import add_http_endpoint_check, add_http_endpoint_request_check
from .resolver import EndpointResolver, EnvironmentEndpointResolver


class HealthProbes:
    """
    In-memory ProbeRegistry wiring settings, resolver and HTTP client for every probe.

    ``close()`` closes the HTTP client, including one passed in by the caller, since the
    registered probes share it.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        resolver: EndpointResolver | None = None,
        settings: ProbeSettings | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.http_client = http_client or create_default_http_client(self.settings)
        self.resolver = resolver or EnvironmentEndpointResolver(self.settings.endpoint_env_prefix)
        self._checks: dict[str, HttpEndpointProbe] = {}

    def register(self, name: str, check: HttpEndpointProbe) -> HealthProbes:
        if name in self._checks:
            raise InvalidConfiguration(f"Health check '{name}' is already registered")
        self._checks[name] = check
        return self

    def add_http_endpoint_check(
        self,
        name: str,
        endpoint_name: str,
        relative_path: str,
        *annotations: Annotation | Mapping[str, Any],
        method: HttpMethod | str | None = None,
        scheme: str | None = None,
        headers: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        expected_status: int | HTTPStatus | None = None,
        refine: Refine | None = None,
    ) -> HealthProbes:
        return add_http_endpoint_check(
            self,
            name,
            endpoint_name,
            relative_path,
            *annotations,
            method=method,
            scheme=scheme,
            headers=headers,
            expected_status=expected_status,
            refine=refine,
            resolver=self.resolver,
            http_client=self.http_client,
            settings=self.settings,
        )

    def add_http_endpoint_request_check(
        self,
        name: str,
        endpoint_name: str,
        request_builder: RequestBuilder,
        *annotations: Annotation | Mapping[str, Any],
        expected_status: int | HTTPStatus | None = None,
        refine: Refine | None = None,
    ) -> HealthProbes:
        return add_http_endpoint_request_check(
            self,
            name,
            endpoint_name,
            request_builder,
            *annotations,
            expected_status=expected_status,
            refine=refine,
            resolver=self.resolver,
            http_client=self.http_client,
            settings=self.settings,
        )

    def names(self) -> list[str]:
        return list(self._checks)

    def get(self, name: str) -> HttpEndpointProbe:
        try:
            return self._checks[name]
        except KeyError:
            raise KeyError(f"Health check '{name}' is not registered") from None

    def run(self, name: str) -> Verdict:
        return self.get(name).check()

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> HealthProbes:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["HealthProbes"]
