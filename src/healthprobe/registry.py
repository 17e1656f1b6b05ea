# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Registration of HTTP endpoint probes into a health-check registry.

Everything that can be decided ahead of time happens here, once: the endpoint is resolved
to a port, the request is built against ``<scheme>://<host>:<port>`` and the expectation is
captured in ProbeParameters. Any failure raises synchronously to the registering caller and
nothing is registered.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from http import HTTPStatus
from typing import Any, Protocol, TypeVar

from .config import ProbeSettings, load_probe_settings
from .errors import EndpointResolutionError, InvalidConfiguration
from .http.client import HttpClient, SendFunction, create_default_http_client
from .http.models import HttpMethod, HttpRequest
from .http.url import EndpointAddress
from .models.probe import Annotation, ProbeParameters, Refine, RequestBuilder, RequestSpec
from .probe.executor import HttpEndpointProbe
from .resolver import EndpointResolver, EnvironmentEndpointResolver

logger = logging.getLogger(__name__)


class ProbeRegistry(Protocol):
    """Anything that accepts named health checks."""

    def register(self, name: str, check: HttpEndpointProbe) -> Any: ...


RegistryT = TypeVar("RegistryT", bound=ProbeRegistry)


def resolve_base_address(
    endpoint_name: str,
    *,
    resolver: EndpointResolver | None = None,
    settings: ProbeSettings | None = None,
) -> EndpointAddress:
    """Resolve ``endpoint_name`` to ``http://<host>:<port>/``."""
    settings = settings or load_probe_settings()
    resolver = resolver or EnvironmentEndpointResolver(settings.endpoint_env_prefix)
    try:
        port = resolver.get_endpoint_port(endpoint_name)
    except EndpointResolutionError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise EndpointResolutionError(endpoint_name, f"Failed to resolve endpoint '{endpoint_name}': {exc}") from exc
    try:
        return EndpointAddress(host=settings.host, port=port)
    except InvalidConfiguration as exc:
        raise EndpointResolutionError(endpoint_name, f"Endpoint '{endpoint_name}' resolved to {port!r}: {exc}") from exc


def add_http_endpoint_request_check(
    registry: RegistryT,
    name: str,
    endpoint_name: str,
    request_builder: RequestBuilder,
    *annotations: Annotation | Mapping[str, Any],
    expected_status: int | HTTPStatus | None = None,
    refine: Refine | None = None,
    resolver: EndpointResolver | None = None,
    http_client: HttpClient | SendFunction | None = None,
    settings: ProbeSettings | None = None,
) -> RegistryT:
    """
    Register a probe whose request is produced by ``request_builder(base_address)``.

    The builder runs exactly once, here; the request it returns is reused for every execution.
    """
    settings = settings or load_probe_settings()
    base_address = resolve_base_address(endpoint_name, resolver=resolver, settings=settings)
    request = request_builder(base_address)
    if not isinstance(request, HttpRequest):
        raise InvalidConfiguration(f"Request builder for '{name}' returned {type(request).__name__}, expected HttpRequest")

    parameters = ProbeParameters(
        request=request,
        expected_status=expected_status,
        refine=refine,
        annotations=annotations,
    )
    owns_client = http_client is None
    probe = HttpEndpointProbe(
        parameters,
        create_default_http_client(settings) if owns_client else http_client,
        owns_client=owns_client,
    )
    try:
        registry.register(name, probe)
    except Exception:
        probe.close()
        raise
    logger.info("Registered http endpoint check '%s': %s %s", name, request.method.value, request.url)
    return registry


def add_http_endpoint_check(
    registry: RegistryT,
    name: str,
    endpoint_name: str,
    relative_path: str,
    *annotations: Annotation | Mapping[str, Any],
    method: HttpMethod | str | None = None,
    scheme: str | None = None,
    headers: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
    expected_status: int | HTTPStatus | None = None,
    refine: Refine | None = None,
    resolver: EndpointResolver | None = None,
    http_client: HttpClient | SendFunction | None = None,
    settings: ProbeSettings | None = None,
) -> RegistryT:
    """
    Register a probe for ``relative_path`` on the local endpoint named ``endpoint_name``.

    ``method`` defaults to GET, ``scheme`` to http and ``expected_status`` to 200. Extra
    positional arguments are annotations: (key, value) pairs or mappings attached to every
    verdict, e.g. escalation contacts.
    """
    spec = RequestSpec(
        relative_path=relative_path,
        method=method,
        scheme=scheme,
        headers=headers,
    )
    return add_http_endpoint_request_check(
        registry,
        name,
        endpoint_name,
        spec,
        *annotations,
        expected_status=expected_status,
        refine=refine,
        resolver=resolver,
        http_client=http_client,
        settings=settings,
    )


__all__ = [
    "ProbeRegistry",
    "add_http_endpoint_check",
    "add_http_endpoint_request_check",
    "resolve_base_address",
]
