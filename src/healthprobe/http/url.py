# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Base address type handed to request builders."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from urllib.parse import quote

from ..errors import InvalidConfiguration

DEFAULT_SCHEME = "http"

# RFC 3986 section 3.1: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_ABSOLUTE_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
# Path characters left unescaped; "?", "#" and "%" are always escaped so the path round-trips.
_PATH_SAFE = "/!$&'()*+,;=:@-._~"


def check_scheme_name(scheme: str | None) -> bool:
    """Return True when ``scheme`` is a syntactically valid URI scheme name."""
    if not isinstance(scheme, str):
        return False
    return bool(_SCHEME_RE.fullmatch(scheme))


def is_absolute_reference(path: str) -> bool:
    """True for references that carry their own scheme or authority."""
    return path.startswith("//") or bool(_ABSOLUTE_URL_RE.match(path))


@dataclass(frozen=True)
class EndpointAddress:
    """
    Address of a locally hosted endpoint: scheme, host, port and path.

    Instances are immutable; ``with_scheme`` and ``with_path`` return modified copies so one
    resolved base address can seed any number of requests.
    """

    host: str
    port: int
    scheme: str = DEFAULT_SCHEME
    path: str = "/"

    def __post_init__(self) -> None:
        if not isinstance(self.port, int) or isinstance(self.port, bool) or not 0 < self.port < 65536:
            raise InvalidConfiguration(f"Invalid port: {self.port!r}")
        if not check_scheme_name(self.scheme):
            raise InvalidConfiguration(f"Invalid uri scheme: {self.scheme!r}")

    def with_scheme(self, scheme: str) -> EndpointAddress:
        if not check_scheme_name(scheme):
            raise InvalidConfiguration(f"Invalid uri scheme: {scheme!r}")
        return replace(self, scheme=scheme)

    def with_path(self, path: str) -> EndpointAddress:
        """Return a copy whose path is ``path``; absolute URLs are rejected."""
        path = path or ""
        if is_absolute_reference(path):
            raise InvalidConfiguration(f"Relative path expected, got absolute reference: {path!r}")
        if not path.startswith("/"):
            path = "/" + path
        return replace(self, path=path)

    @property
    def authority(self) -> str:
        host = f"[{self.host}]" if ":" in self.host and not self.host.startswith("[") else self.host
        return f"{host}:{self.port}"

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.authority}{quote(self.path, safe=_PATH_SAFE)}"

    def __str__(self) -> str:
        return self.url


__all__ = ["DEFAULT_SCHEME", "EndpointAddress", "check_scheme_name", "is_absolute_reference"]
