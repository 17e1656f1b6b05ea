# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe construction models: how to build the request and how to judge the response."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from ..errors import InvalidConfiguration
from ..http.headers import freeze_headers
from ..http.models import HttpMethod, HttpRequest, HttpResponse, RequestHeaders
from ..http.url import DEFAULT_SCHEME, EndpointAddress, check_scheme_name
from .verdict import Verdict

RequestBuilder = Callable[[EndpointAddress], HttpRequest]
Refine = Callable[[HttpResponse, Verdict], Verdict]
Annotation = tuple[str, Any]
AnnotationsInput = Iterable[Annotation] | Mapping[str, Any]


@dataclass(frozen=True)
class RequestSpec:
    """
    Declarative request description; calling it with a base address builds the request.

    ``scheme=None`` means http. A supplied scheme must be a valid URI scheme name or
    building raises InvalidConfiguration. Header values are not validated.
    """

    relative_path: str
    method: HttpMethod = HttpMethod.GET
    scheme: str | None = None
    headers: RequestHeaders = ()

    def __post_init__(self) -> None:
        try:
            method = HttpMethod.parse(self.method)
        except ValueError as exc:
            raise InvalidConfiguration(f"Unsupported http method: {self.method!r}") from exc
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "headers", freeze_headers(self.headers))

    def build(self, base_address: EndpointAddress) -> HttpRequest:
        address = base_address.with_path(self.relative_path)
        if self.scheme is None:
            scheme = DEFAULT_SCHEME
        elif check_scheme_name(self.scheme):
            scheme = self.scheme
        else:
            raise InvalidConfiguration(f"Invalid uri scheme: {self.scheme!r}")
        address = address.with_scheme(scheme)
        return HttpRequest(url=address.url, method=self.method, headers=self.headers)

    __call__ = build


def normalize_expected_status(value: int | HTTPStatus | None) -> int:
    if value is None:
        return int(HTTPStatus.OK)
    if isinstance(value, bool):
        raise InvalidConfiguration(f"Invalid expected status: {value!r}")
    try:
        status = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidConfiguration(f"Invalid expected status: {value!r}") from exc
    if not 100 <= status <= 599:
        raise InvalidConfiguration(f"Invalid expected status: {value!r}")
    return status


def normalize_annotations(annotations: Iterable[AnnotationsInput | Annotation] | None) -> tuple[Annotation, ...]:
    """
    Flatten annotation arguments into ordered (key, value) pairs.

    Each item may be a single pair or a mapping; mappings contribute their items in order.
    """
    pairs: list[Annotation] = []
    for item in annotations or ():
        if isinstance(item, Mapping):
            pairs.extend((str(key), value) for key, value in item.items())
            continue
        try:
            key, value = item
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"Annotation must be a (key, value) pair or mapping: {item!r}") from exc
        pairs.append((str(key), value))
    return tuple(pairs)


@dataclass(frozen=True)
class ProbeParameters:
    """
    Everything one probe needs at execution time, captured once at registration.

    Shared read-only by all concurrent executions of the probe.
    """

    request: HttpRequest
    expected_status: int = int(HTTPStatus.OK)
    refine: Refine | None = None
    annotations: tuple[Annotation, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "expected_status", normalize_expected_status(self.expected_status))
        object.__setattr__(self, "annotations", normalize_annotations(self.annotations))

    def annotation_data(self) -> dict[str, Any]:
        return dict(self.annotations)


__all__ = [
    "Annotation",
    "ProbeParameters",
    "Refine",
    "RequestBuilder",
    "RequestSpec",
    "normalize_annotations",
    "normalize_expected_status",
]
