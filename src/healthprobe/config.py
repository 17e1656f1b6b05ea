# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for healthprobe."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"healthprobe/{__version__}"
DEFAULT_HOST = "localhost"
DEFAULT_ENDPOINT_ENV_PREFIX = "Fabric_Endpoint_"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ProbeSettings:
    """Transport and address defaults shared by every probe."""

    timeout: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    max_body_bytes: int = 1024 * 1024
    host: str = DEFAULT_HOST
    endpoint_env_prefix: str = DEFAULT_ENDPOINT_ENV_PREFIX

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_body_bytes = _int_env("HEALTHPROBE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=_float_env("HEALTHPROBE_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("HEALTHPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("HEALTHPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("HEALTHPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
            host=os.getenv("HEALTHPROBE_HOST") or cls.host,
            endpoint_env_prefix=os.getenv("HEALTHPROBE_ENDPOINT_ENV_PREFIX", cls.endpoint_env_prefix),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
