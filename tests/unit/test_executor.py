# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import httpx

from healthprobe.http import CallableHttpClient, HttpRequest, HttpResponse, StubHttpClient
from healthprobe.models import HealthState, ProbeParameters, Verdict
from healthprobe.probe import HttpEndpointProbe

URL = "http://localhost:8080/health"
REQUEST = HttpRequest(url=URL)


class RaisingHttpClient:
    def __init__(self, exc: BaseException):
        self.exc = exc
        self.calls = 0

    def request(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
        self.calls += 1
        raise self.exc

    def close(self) -> None:  # pragma: no cover - not used
        return None


def test_healthy_response_produces_healthy_verdict():
    client = StubHttpClient({URL: HttpResponse(ok=True, status_code=200)})
    probe = HttpEndpointProbe(ProbeParameters(REQUEST), client)
    assert probe.check().state == HealthState.HEALTHY


def test_timeout_is_reported_not_raised():
    client = RaisingHttpClient(httpx.ReadTimeout("timed out"))
    params = ProbeParameters(REQUEST, annotations=[("owner", "team-a")])
    verdict = HttpEndpointProbe(params, client).check()

    assert verdict.state == HealthState.UNHEALTHY
    assert verdict.description.startswith("Endpoint did not respond before the timeout")
    assert verdict.data["error_category"] == "TIMEOUT"
    assert verdict.data["error_type"] == "ReadTimeout"
    assert verdict.data["error_message"] == "timed out"
    assert verdict.data["url"] == URL
    assert verdict.data["owner"] == "team-a"
    assert client.calls == 1


def test_connection_refused_is_reported_not_raised():
    verdict = HttpEndpointProbe(ProbeParameters(REQUEST), RaisingHttpClient(ConnectionRefusedError("refused"))).check()
    assert verdict.state == HealthState.UNHEALTHY
    assert verdict.data["error_category"] == "CONNECTION_ERROR"


def test_client_reported_failure_is_classified():
    failure = HttpResponse(ok=False, error_type="ConnectTimeout", error_message="connect timed out")
    verdict = HttpEndpointProbe(ProbeParameters(REQUEST), StubHttpClient({URL: failure})).check()
    assert verdict.state == HealthState.UNHEALTHY
    assert verdict.data["error_category"] == "TIMEOUT"
    assert verdict.data["error_message"] == "connect timed out"


def test_error_status_with_ok_false_is_still_a_response():
    response = HttpResponse(ok=False, status_code=503, error_message="unavailable")
    verdict = HttpEndpointProbe(ProbeParameters(REQUEST), StubHttpClient({URL: response})).check()
    assert verdict.state == HealthState.UNHEALTHY
    assert verdict.data["status_code"] == 503
    assert "error_category" not in verdict.data


def test_each_execution_sends_the_prebuilt_request_once():
    client = StubHttpClient({URL: HttpResponse(ok=True, status_code=200)})
    params = ProbeParameters(REQUEST)
    probe = HttpEndpointProbe(params, client)
    probe.check()
    probe()

    assert len(client.requests) == 2
    assert all(sent is params.request for sent in client.requests)


def test_concurrent_executions_are_independent():
    counter = iter(range(1000))
    lock = threading.Lock()

    def send(request: HttpRequest) -> HttpResponse:
        with lock:
            n = next(counter)
        time.sleep(0.001)
        return HttpResponse(ok=True, status_code=200 if n % 2 == 0 else 500, meta={"n": n})

    def refine(response: HttpResponse, baseline: Verdict) -> Verdict:
        return baseline.with_data({"n": response.meta["n"]})

    params = ProbeParameters(REQUEST, refine=refine, annotations=[("owner", "team-a")])
    probe = HttpEndpointProbe(params, CallableHttpClient(send))

    with ThreadPoolExecutor(max_workers=20) as pool:
        verdicts = list(pool.map(lambda _: probe.check(), range(100)))

    assert sorted(v.data["n"] for v in verdicts) == list(range(100))
    for verdict in verdicts:
        expected = HealthState.HEALTHY if verdict.data["n"] % 2 == 0 else HealthState.UNHEALTHY
        assert verdict.state == expected
        assert verdict.data["status_code"] == (200 if expected == HealthState.HEALTHY else 500)
        assert verdict.data["owner"] == "team-a"
    assert len({id(v.data) for v in verdicts}) == 100
    assert params.annotations == (("owner", "team-a"),)


def test_repr_names_the_request():
    probe = HttpEndpointProbe(ProbeParameters(REQUEST, expected_status=204), StubHttpClient())
    assert "GET http://localhost:8080/health" in repr(probe)
    assert "204" in repr(probe)


def test_client_returning_non_response_is_unhealthy():
    probe = HttpEndpointProbe(ProbeParameters(REQUEST), CallableHttpClient(lambda request: None))
    verdict = probe.check()
    assert verdict.state == HealthState.UNHEALTHY
    assert verdict.data["error_category"] == "PROTOCOL_ERROR"
    assert verdict.data["error_type"] == "NoneType"


def test_plain_send_function_is_accepted_as_client():
    sent = []

    def send(request: HttpRequest) -> HttpResponse:
        sent.append(request)
        return HttpResponse(ok=True, status_code=200, url=request.url)

    probe = HttpEndpointProbe(ProbeParameters(REQUEST), send)
    assert probe.check().state == HealthState.HEALTHY
    assert sent == [REQUEST]


def test_close_only_closes_owned_clients():
    shared = StubHttpClient()
    HttpEndpointProbe(ProbeParameters(REQUEST), shared).close()
    assert not shared.closed

    owned = StubHttpClient()
    HttpEndpointProbe(ProbeParameters(REQUEST), owned, owns_client=True).close()
    assert owned.closed
