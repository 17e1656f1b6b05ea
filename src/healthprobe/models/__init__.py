# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for healthprobe."""

from ..http.models import Headers, HttpMethod, HttpRequest, HttpResponse
from .probe import ProbeParameters, Refine, RequestBuilder, RequestSpec
from .verdict import HealthState, Verdict

__all__ = [
    "Headers",
    "HealthState",
    "HttpMethod",
    "HttpRequest",
    "HttpResponse",
    "ProbeParameters",
    "Refine",
    "RequestBuilder",
    "RequestSpec",
    "Verdict",
]
