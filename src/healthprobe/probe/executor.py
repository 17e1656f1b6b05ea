# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP endpoint probe: one send per execution, reduced into a Verdict."""

from __future__ import annotations

import logging

from ..errors import ErrorCategory, categorize_error_type, categorize_exception
from ..http.client import HttpClient, SendFunction, ensure_http_client
from ..http.models import HttpResponse
from ..models.probe import ProbeParameters
from ..models.verdict import Verdict
from .reducer import failure_verdict, reduce_response

logger = logging.getLogger(__name__)


class HttpEndpointProbe:
    """
    Registered health check for one HTTP endpoint.

    Holds no per-execution state: the parameters and the prebuilt request are shared,
    read-only, by every call, so ``check`` may run from any number of threads at once.
    Transport failures never escape; they are reported as Unhealthy verdicts.
    """

    def __init__(self, parameters: ProbeParameters, http_client: HttpClient | SendFunction, *, owns_client: bool = False):
        self.parameters = parameters
        self.http_client = ensure_http_client(http_client)
        self.owns_client = owns_client

    def check(self) -> Verdict:
        request = self.parameters.request
        try:
            response = self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.warning("Probe request to %s failed (%s): %s", request.url, category.value, exc)
            return failure_verdict(
                self.parameters,
                category,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )

        if not isinstance(response, HttpResponse):
            error_message = f"HTTP client returned {type(response).__name__}, expected HttpResponse"
            logger.warning("Probe request to %s failed: %s", request.url, error_message)
            return failure_verdict(
                self.parameters,
                ErrorCategory.PROTOCOL_ERROR,
                error_type=type(response).__name__,
                error_message=error_message,
            )

        if response.is_transport_failure:
            category = categorize_error_type(response.error_type)
            logger.warning("Probe request to %s failed (%s): %s", request.url, category.value, response.error_message)
            return failure_verdict(
                self.parameters,
                category,
                error_type=response.error_type,
                error_message=response.error_message,
            )

        verdict = reduce_response(response, self.parameters)
        logger.debug("Probe %s %s -> %s", request.method.value, request.url, verdict.state.value)
        return verdict

    __call__ = check

    def close(self) -> None:
        """Close the HTTP client if this probe created it; shared clients are left alone."""
        if self.owns_client:
            self.http_client.close()

    def __repr__(self) -> str:
        request = self.parameters.request
        return f"HttpEndpointProbe({request.method.value} {request.url}, expected={self.parameters.expected_status})"


__all__ = ["HttpEndpointProbe"]
