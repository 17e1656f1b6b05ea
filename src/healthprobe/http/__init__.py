# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import CallableHttpClient, StubHttpClient
from .client import HttpClient, SendFunction, create_default_http_client, ensure_http_client
from .headers import freeze_headers, header_value
from .httpx_client import HttpxClient
from .models import Headers, HttpMethod, HttpRequest, HttpResponse, RequestHeaders
from .url import DEFAULT_SCHEME, EndpointAddress, check_scheme_name

__all__ = [
    "DEFAULT_SCHEME",
    "CallableHttpClient",
    "EndpointAddress",
    "Headers",
    "HttpClient",
    "HttpMethod",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "RequestHeaders",
    "SendFunction",
    "StubHttpClient",
    "check_scheme_name",
    "create_default_http_client",
    "ensure_http_client",
    "freeze_headers",
    "header_value",
]
