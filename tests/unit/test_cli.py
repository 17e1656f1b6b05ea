# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from healthprobe.cli import main as cli
from healthprobe.errors import HealthProbeError
from healthprobe.http import HttpResponse, StubHttpClient


@pytest.fixture
def stub_client(monkeypatch):
    monkeypatch.delenv("HEALTHPROBE_HOST", raising=False)
    client = StubHttpClient()
    monkeypatch.setattr(cli, "create_default_http_client", lambda settings: client)
    return client


def test_build_parser():
    args = cli.build_parser().parse_args(
        ["ServiceEndpoint", "/health", "--port", "8080", "--header", "X-A: 1", "--annotate", "owner=team-a", "--json"]
    )
    assert args.endpoint == "ServiceEndpoint"
    assert args.path == "/health"
    assert args.port == 8080
    assert args.header == ["X-A: 1"]
    assert args.annotate == ["owner=team-a"]
    assert args.json is True


def test_parse_headers_and_annotations():
    assert cli._parse_headers(["X-A: 1", "X-A: 2", "Accept:text/plain"]) == [("X-A", ["1", "2"]), ("Accept", ["text/plain"])]
    assert cli._parse_annotations(["owner=team-a", "url=http://x/?a=b"]) == [("owner", "team-a"), ("url", "http://x/?a=b")]
    with pytest.raises(HealthProbeError):
        cli._parse_headers(["no-colon"])
    with pytest.raises(HealthProbeError):
        cli._parse_annotations(["=value"])


def test_main_healthy_summary(stub_client, capsys):
    stub_client.add("http://localhost:8080/health", HttpResponse(ok=True, status_code=200))
    code = cli.main(["ServiceEndpoint", "/health", "--port", "8080", "--header", "X-A: 1", "--annotate", "owner=team-a"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Healthy" in out
    assert "owner: team-a" in out
    assert stub_client.requests[0].header_values("X-A") == ("1",)


def test_main_json_unhealthy(stub_client, capsys):
    stub_client.add("http://localhost:8080/health", HttpResponse(ok=True, status_code=500))
    code = cli.main(["ServiceEndpoint", "/health", "--port", "8080", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert code == 2
    assert payload["state"] == "Unhealthy"
    assert payload["data"]["status_code"] == 500


def test_main_resolves_endpoint_from_environment(stub_client, monkeypatch, capsys):
    monkeypatch.delenv("HEALTHPROBE_ENDPOINT_ENV_PREFIX", raising=False)
    monkeypatch.setenv("Fabric_Endpoint_ServiceEndpoint", "9090")
    stub_client.add("http://localhost:9090/ready", HttpResponse(ok=True, status_code=204))
    assert cli.main(["ServiceEndpoint", "/ready", "--expect", "204"]) == 0
    capsys.readouterr()


def test_main_configuration_errors_exit_3(stub_client, monkeypatch, capsys):
    monkeypatch.delenv("HEALTHPROBE_ENDPOINT_ENV_PREFIX", raising=False)
    monkeypatch.delenv("Fabric_Endpoint_Nowhere", raising=False)
    assert cli.main(["Nowhere", "/health"]) == 3
    assert "Nowhere" in capsys.readouterr().err

    assert cli.main(["ServiceEndpoint", "/health", "--port", "8080", "--scheme", "ht tp"]) == 3
    assert "scheme" in capsys.readouterr().err
    assert stub_client.requests == []
