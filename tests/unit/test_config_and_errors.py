# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import importlib
import socket
import ssl

import httpx

from healthprobe import config
from healthprobe.config import DEFAULT_USER_AGENT
from healthprobe.errors import (
    EndpointResolutionError,
    ErrorCategory,
    InvalidConfiguration,
    categorize_error_type,
    categorize_exception,
    error_category_to_reason,
)


def test_probe_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("HEALTHPROBE_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("HEALTHPROBE_USER_AGENT", "Checker/1.0")
    monkeypatch.setenv("HEALTHPROBE_HTTP_REDIRECTS", "yes")
    monkeypatch.setenv("HEALTHPROBE_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("HEALTHPROBE_HTTP_MAX_BODY_BYTES", "2048")
    monkeypatch.setenv("HEALTHPROBE_HOST", "127.0.0.1")
    monkeypatch.setenv("HEALTHPROBE_ENDPOINT_ENV_PREFIX", "PORT_")

    importlib.reload(config)
    settings = config.load_probe_settings()

    assert settings.timeout == 2.5
    assert settings.user_agent == "Checker/1.0"
    assert settings.allow_redirects is True
    assert settings.verify_ssl is False
    assert settings.max_body_bytes == 2048
    assert settings.host == "127.0.0.1"
    assert settings.endpoint_env_prefix == "PORT_"


def test_probe_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("HEALTHPROBE_HTTP_TIMEOUT", "soon")
    monkeypatch.setenv("HEALTHPROBE_HTTP_MAX_BODY_BYTES", "0")
    monkeypatch.setenv("HEALTHPROBE_HOST", "")
    monkeypatch.delenv("HEALTHPROBE_USER_AGENT", raising=False)
    monkeypatch.delenv("HEALTHPROBE_ENDPOINT_ENV_PREFIX", raising=False)

    importlib.reload(config)
    settings = config.load_probe_settings()

    assert settings.timeout == config.ProbeSettings.timeout
    assert settings.max_body_bytes == config.ProbeSettings.max_body_bytes
    assert settings.host == "localhost"
    assert settings.endpoint_env_prefix == "Fabric_Endpoint_"
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_load_probe_settings_reads_env_at_call_time(monkeypatch):
    importlib.reload(config)
    monkeypatch.setenv("HEALTHPROBE_HTTP_TIMEOUT", "1.1")
    assert config.load_probe_settings().timeout == 1.1
    monkeypatch.setenv("HEALTHPROBE_HTTP_TIMEOUT", "2.2")
    assert config.load_probe_settings().timeout == 2.2


def test_categorize_exception_maps_transport_failures():
    assert categorize_exception(httpx.ReadTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(TimeoutError()) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ConnectionRefusedError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(httpx.RemoteProtocolError("garbage")) == ErrorCategory.PROTOCOL_ERROR
    assert categorize_exception(ssl.SSLError()) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror()) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ValueError("odd")) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_error_type_uses_exception_names():
    assert categorize_error_type("ConnectTimeout") == ErrorCategory.TIMEOUT
    assert categorize_error_type("ConnectError") == ErrorCategory.CONNECTION_ERROR
    assert categorize_error_type("RemoteProtocolError") == ErrorCategory.PROTOCOL_ERROR
    assert categorize_error_type("Whatever") == ErrorCategory.UNKNOWN_ERROR
    assert categorize_error_type(None) == ErrorCategory.UNKNOWN_ERROR


def test_error_category_reasons_are_human_readable():
    assert "timeout" in error_category_to_reason(ErrorCategory.TIMEOUT)
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""


def test_registration_errors_keep_builtin_bases():
    assert issubclass(InvalidConfiguration, ValueError)
    exc = EndpointResolutionError("Api", "missing")
    assert isinstance(exc, LookupError)
    assert exc.endpoint_name == "Api"
    assert str(exc) == "missing"


def test_setup_logging_quiets_transport_loggers(monkeypatch):
    import logging

    from healthprobe.log import TRANSPORT_LOGGERS, setup_logging

    for name in TRANSPORT_LOGGERS:
        monkeypatch.setattr(logging.getLogger(name), "level", logging.NOTSET)

    setup_logging("INFO")
    assert all(logging.getLogger(name).level == logging.WARNING for name in TRANSPORT_LOGGERS)

    setup_logging("debug")
    assert all(logging.getLogger(name).level == logging.DEBUG for name in TRANSPORT_LOGGERS)

    setup_logging("not-a-level")
    assert logging.getLogger("httpx").level == logging.WARNING
