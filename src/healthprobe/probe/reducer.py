# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Reduce a response, or a failed send, into a Verdict."""

from __future__ import annotations

import logging

from ..errors import ErrorCategory, error_category_to_reason
from ..http.models import HttpResponse
from ..models.probe import ProbeParameters
from ..models.verdict import Verdict

logger = logging.getLogger(__name__)


def baseline_verdict(response: HttpResponse, expected_status: int) -> Verdict:
    actual = response.status_code
    data = {"status_code": actual, "expected_status": expected_status}
    if actual == expected_status:
        return Verdict.healthy(f"Endpoint responded with expected status {actual}", data)
    return Verdict.unhealthy(f"Expected status {expected_status} but got {actual}", data)


def failure_verdict(
    parameters: ProbeParameters,
    category: ErrorCategory,
    *,
    error_type: str | None = None,
    error_message: str | None = None,
) -> Verdict:
    """Unhealthy verdict for a probe whose execution failed; annotations are applied last."""
    reason = error_category_to_reason(category)
    description = f"{reason}: {error_message}" if error_message else reason
    verdict = Verdict.unhealthy(
        description,
        {
            "url": parameters.request.url,
            "error_category": category.value,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
    return verdict.with_data(parameters.annotations)


def reduce_response(response: HttpResponse, parameters: ProbeParameters) -> Verdict:
    """
    Compare the status against the expectation, let ``refine`` override, then annotate.

    A refine function that raises (or returns something other than a Verdict) yields an
    Unhealthy verdict instead of propagating.
    """
    verdict = baseline_verdict(response, parameters.expected_status)

    if parameters.refine is not None:
        try:
            refined = parameters.refine(response, verdict)
            if not isinstance(refined, Verdict):
                raise TypeError(f"refine returned {type(refined).__name__}, expected Verdict")
        except Exception as exc:  # noqa: BLE001
            logger.warning("Refine function failed for %s: %s", parameters.request.url, exc, exc_info=True)
            return failure_verdict(
                parameters,
                ErrorCategory.REFINE_ERROR,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
        verdict = refined

    return verdict.with_data(parameters.annotations)


__all__ = ["baseline_verdict", "failure_verdict", "reduce_response"]
