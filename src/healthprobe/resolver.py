# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logical endpoint name -> local port resolution."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Protocol

from .config import DEFAULT_ENDPOINT_ENV_PREFIX
from .errors import EndpointResolutionError


class EndpointResolver(Protocol):
    def get_endpoint_port(self, endpoint_name: str) -> int: ...


def _validate_port(endpoint_name: str, raw: object) -> int:
    try:
        port = int(str(raw).strip())
    except (TypeError, ValueError) as exc:
        raise EndpointResolutionError(endpoint_name, f"Endpoint '{endpoint_name}' has non-numeric port {raw!r}") from exc
    if not 0 < port < 65536:
        raise EndpointResolutionError(endpoint_name, f"Endpoint '{endpoint_name}' has out-of-range port {port}")
    return port


class EnvironmentEndpointResolver(EndpointResolver):
    """
    Reads ports from ``<prefix><endpoint_name>`` environment variables.

    The default prefix matches the variables a Service Fabric host injects for declared
    endpoints (``Fabric_Endpoint_<name>``). Lookups happen at call time.
    """

    def __init__(self, prefix: str = DEFAULT_ENDPOINT_ENV_PREFIX):
        self.prefix = prefix

    def get_endpoint_port(self, endpoint_name: str) -> int:
        variable = f"{self.prefix}{endpoint_name}"
        raw = os.getenv(variable)
        if raw is None or not raw.strip():
            raise EndpointResolutionError(endpoint_name, f"Endpoint '{endpoint_name}' is not defined ({variable} is unset)")
        return _validate_port(endpoint_name, raw)


class StaticEndpointResolver(EndpointResolver):
    """Fixed name -> port mapping."""

    def __init__(self, ports: Mapping[str, int]):
        self._ports = dict(ports)

    def get_endpoint_port(self, endpoint_name: str) -> int:
        if endpoint_name not in self._ports:
            raise EndpointResolutionError(endpoint_name, f"Endpoint '{endpoint_name}' is not defined")
        return _validate_port(endpoint_name, self._ports[endpoint_name])


__all__ = ["EndpointResolver", "EnvironmentEndpointResolver", "StaticEndpointResolver"]
