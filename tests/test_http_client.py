from __future__ import annotations

import base64
import json

import httpx
import pytest

from adapters.http_client import RegistryClient, build_client
from core.config import AppSettings
from core.domain.errors import RequestError
from core.services.payload_builder import build_file_request, build_url_request


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(server_url="http://registry.test:9081/", token="abc", provider="Local")


def test_register_posts_json_to_register_endpoint(settings: AppSettings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"model_name": ["Kubernetes"]})

    client = RegistryClient(settings, client=build_client(settings, transport=httpx.MockTransport(handler)))
    body = client.register(build_file_request(b"raw-bytes", "model.yaml"))

    (request,) = seen
    assert request.method == "POST"
    assert str(request.url) == "http://registry.test:9081/api/meshmodels/register"
    assert request.headers["Content-Type"] == "application/json"
    assert "token=abc" in request.headers.get("cookie", "")
    payload = json.loads(request.content)
    assert payload["uploadType"] == "file"
    assert base64.b64decode(payload["importBody"]["modelFile"]) == b"raw-bytes"
    assert json.loads(body) == {"model_name": ["Kubernetes"]}


@pytest.mark.parametrize("status", [201, 400, 500])
def test_non_200_is_a_request_error(settings: AppSettings, status: int) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(status, text="nope"))
    client = RegistryClient(settings, client=httpx.Client(transport=transport))

    with pytest.raises(RequestError) as excinfo:
        client.register(build_url_request("https://example.com/model"))

    assert excinfo.value.status_code == status
    assert excinfo.value.method == "POST"


def test_transport_failure_is_a_request_error(settings: AppSettings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = RegistryClient(settings, client=httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(RequestError) as excinfo:
        client.register(build_url_request("https://example.com/model"))

    assert excinfo.value.status_code is None
    assert "connection refused" in excinfo.value.message


def test_ping_reports_connectivity(settings: AppSettings) -> None:
    ok_client = RegistryClient(
        settings, client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
    )

    assert ok_client.ping() == (True, "HTTP 204")
