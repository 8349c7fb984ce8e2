from __future__ import annotations

import pytest
import requests
import responses

from modiesel_sdk.config import ClientConfig
from modiesel_sdk.exceptions import ServerError, TransportError, ValidationError
from modiesel_sdk.http_client import REQUEST_CANCELLED, HttpClient
from modiesel_sdk.tracing import TRACE_HEADER, TraceContext

from conftest import api_url


@pytest.fixture()
def http(config) -> HttpClient:
    return HttpClient(config, trace=TraceContext())


@pytest.fixture()
def retrying_http(config) -> HttpClient:
    cfg = ClientConfig(env_name="test", api_base_url=config.api_base_url, retries=2, retry_backoff_seconds=0)
    return HttpClient(cfg, trace=TraceContext())


@responses.activate
def test_get_returns_json_list_and_sends_trace(http: HttpClient) -> None:
    responses.add(responses.GET, api_url("clientes"), json=[{"id": 1}], status=200)

    assert http.request("GET", "/clientes") == [{"id": 1}]
    sent = responses.calls[0].request.headers
    assert sent[TRACE_HEADER] == http.trace.trace_id
    assert http.last_operation.result == "success"


@responses.activate
def test_get_is_retried_on_server_error(retrying_http: HttpClient) -> None:
    responses.add(responses.GET, api_url("productos"), json={"message": "down"}, status=503)
    responses.add(responses.GET, api_url("productos"), json=[], status=200)

    assert retrying_http.request("GET", "/productos") == []
    assert len(responses.calls) == 2


@responses.activate
def test_post_is_sent_exactly_once(retrying_http: HttpClient) -> None:
    responses.add(responses.POST, api_url("ventas"), json={"message": "down"}, status=503)

    with pytest.raises(ServerError):
        retrying_http.request("POST", "/ventas", json_body={"total": 1})
    assert len(responses.calls) == 1


@responses.activate
def test_connection_error_becomes_transport_error(http: HttpClient) -> None:
    responses.add(responses.GET, api_url("clientes"), body=requests.ConnectionError("refused"))

    with pytest.raises(TransportError) as excinfo:
        http.request("GET", "/clientes")
    assert excinfo.value.code == "TRANSPORT_ERROR"
    assert excinfo.value.status_code == 0


@responses.activate
def test_plain_text_error_body_is_kept_as_message(http: HttpClient) -> None:
    responses.add(responses.POST, api_url("ventas"), body="Stock insuficiente", status=400)

    with pytest.raises(ValidationError) as excinfo:
        http.request("POST", "/ventas", json_body={})
    assert excinfo.value.message == "Stock insuficiente"


@responses.activate
def test_get_cache_and_invalidation_by_mutation(http: HttpClient) -> None:
    responses.add(responses.GET, api_url("clientes"), json=[{"id": 1}], status=200)
    responses.add(responses.POST, api_url("clientes"), json={"id": 2}, status=201)

    http.request("GET", "/clientes")
    http.request("GET", "/clientes")
    assert len(responses.calls) == 1

    http.request("POST", "/clientes", json_body={"razonSocial": "Nuevo"})
    http.request("GET", "/clientes")
    assert len(responses.calls) == 3


@responses.activate
def test_cache_can_be_bypassed(http: HttpClient) -> None:
    responses.add(responses.GET, api_url("productos"), json=[], status=200)

    http.request("GET", "/productos", use_get_cache=False)
    http.request("GET", "/productos", use_get_cache=False)
    assert len(responses.calls) == 2


@responses.activate
def test_response_for_switched_context_is_dropped(http: HttpClient) -> None:
    version = http.switch_context("sale_compose")

    def _callback(request):
        http.switch_context("sale_compose")
        return (201, {}, '{"id": 10}')

    responses.add_callback(responses.POST, api_url("ventas"), callback=_callback)

    with pytest.raises(TransportError) as excinfo:
        http.request("POST", "/ventas", json_body={}, context_key="sale_compose", context_version=version)
    assert excinfo.value.code == REQUEST_CANCELLED


def test_stale_context_is_rejected_before_dispatch(http: HttpClient) -> None:
    version = http.switch_context("sale_compose")
    http.switch_context("sale_compose")

    with pytest.raises(TransportError) as excinfo:
        http.request("POST", "/ventas", json_body={}, context_key="sale_compose", context_version=version)
    assert excinfo.value.code == REQUEST_CANCELLED


@responses.activate
def test_after_response_hook_sees_error_responses(http: HttpClient) -> None:
    seen: list[int] = []
    http.after_response = lambda response: seen.append(response.status_code)
    responses.add(responses.GET, api_url("usuarios"), json={"message": "expired"}, status=401)

    with pytest.raises(Exception):
        http.request("GET", "/usuarios")
    assert seen == [401]


def test_normalize_error_types(http: HttpClient) -> None:
    transport = TransportError(code="TRANSPORT_ERROR", message="x", details=None, trace_id=None, status_code=0)
    assert http.normalize_error(transport).type == "network"
    validation = ValidationError(code="BAD", message="x", details=None, trace_id="t", status_code=422)
    assert http.normalize_error(validation).type == "validation"


@responses.activate
def test_before_request_hook_sees_outgoing_call(http: HttpClient) -> None:
    seen: list[tuple[str, str]] = []
    http.before_request = lambda method, url, extra: seen.append((method, url))
    responses.add(responses.DELETE, api_url("clientes/4"), status=204)

    assert http.request("delete", "/clientes/4") is None
    assert seen == [("DELETE", api_url("clientes/4"))]
