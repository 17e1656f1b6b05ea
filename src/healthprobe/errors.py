# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class HealthProbeError(Exception):
    """Base class for registration-time failures."""


class InvalidConfiguration(HealthProbeError, ValueError):
    """A probe was registered with parameters that can never produce a valid request."""


class EndpointResolutionError(HealthProbeError, LookupError):
    """A logical endpoint name could not be mapped to a port."""

    def __init__(self, endpoint_name: str, message: str):
        super().__init__(message)
        self.endpoint_name = endpoint_name


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SSL_ERROR = "SSL_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    REFINE_ERROR = "REFINE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.DecodingError)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError, ConnectionError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


_ERROR_TYPE_CATEGORIES = {
    "ConnectTimeout": ErrorCategory.TIMEOUT,
    "ReadTimeout": ErrorCategory.TIMEOUT,
    "WriteTimeout": ErrorCategory.TIMEOUT,
    "PoolTimeout": ErrorCategory.TIMEOUT,
    "TimeoutException": ErrorCategory.TIMEOUT,
    "TimeoutError": ErrorCategory.TIMEOUT,
    "ConnectError": ErrorCategory.CONNECTION_ERROR,
    "ReadError": ErrorCategory.CONNECTION_ERROR,
    "WriteError": ErrorCategory.CONNECTION_ERROR,
    "NetworkError": ErrorCategory.CONNECTION_ERROR,
    "ProxyError": ErrorCategory.CONNECTION_ERROR,
    "ConnectionError": ErrorCategory.CONNECTION_ERROR,
    "ConnectionRefusedError": ErrorCategory.CONNECTION_ERROR,
    "ConnectionResetError": ErrorCategory.CONNECTION_ERROR,
    "RemoteProtocolError": ErrorCategory.PROTOCOL_ERROR,
    "LocalProtocolError": ErrorCategory.PROTOCOL_ERROR,
    "DecodingError": ErrorCategory.PROTOCOL_ERROR,
    "SSLError": ErrorCategory.SSL_ERROR,
    "SSLCertVerificationError": ErrorCategory.SSL_ERROR,
    "gaierror": ErrorCategory.DNS_ERROR,
    "herror": ErrorCategory.DNS_ERROR,
}


def categorize_error_type(error_type: str | None) -> ErrorCategory:
    """Classify a failure that a client already flattened into an exception class name."""
    if not error_type:
        return ErrorCategory.UNKNOWN_ERROR
    return _ERROR_TYPE_CATEGORIES.get(error_type, ErrorCategory.UNKNOWN_ERROR)


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Endpoint did not respond before the timeout",
        ErrorCategory.CONNECTION_ERROR: "Endpoint is not reachable",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.DNS_ERROR: "Host name resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "Endpoint returned a malformed response",
        ErrorCategory.REFINE_ERROR: "Response check raised an error",
        ErrorCategory.UNKNOWN_ERROR: "Request to endpoint failed",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request to endpoint failed")


__all__ = [
    "EndpointResolutionError",
    "ErrorCategory",
    "HealthProbeError",
    "InvalidConfiguration",
    "categorize_error_type",
    "categorize_exception",
    "error_category_to_reason",
]
