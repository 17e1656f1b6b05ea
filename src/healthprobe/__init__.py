# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
healthprobe package entrypoint.

This package registers HTTP endpoint health checks: a logical endpoint name is resolved to
a local port once, the request is built once, and every execution sends it and reduces the
response (or failure) into a Verdict. HTTP behavior is abstracted behind an injectable
client interface, and domain objects are modeled with typed dataclasses.
"""

from .config import ProbeSettings, load_probe_settings
from .errors import EndpointResolutionError, ErrorCategory, HealthProbeError, InvalidConfiguration
from .http import (
    CallableHttpClient,
    EndpointAddress,
    HttpClient,
    HttpMethod,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import HealthState, ProbeParameters, RequestSpec, Verdict
from .probe import HttpEndpointProbe, reduce_response
from .registry import ProbeRegistry, add_http_endpoint_check, add_http_endpoint_request_check
from .resolver import EndpointResolver, EnvironmentEndpointResolver, StaticEndpointResolver
from .runtime import HealthProbes
from .utils.context import probe_context
from .version import __version__

__all__ = [
    "CallableHttpClient",
    "EndpointAddress",
    "EndpointResolutionError",
    "EndpointResolver",
    "EnvironmentEndpointResolver",
    "ErrorCategory",
    "HealthProbeError",
    "HealthProbes",
    "HealthState",
    "HttpClient",
    "HttpEndpointProbe",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "InvalidConfiguration",
    "ProbeParameters",
    "ProbeRegistry",
    "ProbeSettings",
    "RequestSpec",
    "StaticEndpointResolver",
    "StubHttpClient",
    "Verdict",
    "add_http_endpoint_check",
    "add_http_endpoint_request_check",
    "create_default_http_client",
    "load_probe_settings",
    "probe_context",
    "reduce_response",
    "setup_logging",
    "__version__",
]
