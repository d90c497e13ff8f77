"""Tests for the request dispatcher failover."""

import logging

import httpx
import pytest

from algolia_search.exceptions import ErrorKind, ProgrammingError, ServiceError
from algolia_search.transport import RequestDispatcher, TimeoutBudget

HOSTS = ["h1", "h2", "h3"]


class BrokenStream(httpx.SyncByteStream):
    """Response body that fails while being read."""

    def __iter__(self):
        raise httpx.ReadError("connection reset")
        yield b""  # pragma: no cover


class GarbledStream(httpx.SyncByteStream):
    """Body that is not valid gzip."""

    def __iter__(self):
        yield b"not gzip at all"


def route(responses):
    """Build a handler answering per host; callables are invoked with the request."""
    contacted = []

    def handler(request: httpx.Request) -> httpx.Response:
        contacted.append(request.url.host)
        answer = responses[request.url.host]
        if callable(answer):
            return answer(request)
        return answer

    return handler, contacted


def timeout(request):
    raise httpx.ConnectTimeout("timed out", request=request)


def dispatch(handler, method="GET", path="/1/indexes/", body=None, hosts=HOSTS, **kwargs):
    with httpx.Client(transport=httpx.MockTransport(handler)) as http_client:
        dispatcher = RequestDispatcher(http_client)
        return dispatcher.dispatch(
            method,
            path,
            body,
            hosts=hosts,
            connect_timeout_ms=kwargs.get("connect_timeout_ms", 2000),
            socket_timeout_ms=kwargs.get("socket_timeout_ms", 30000),
            headers=kwargs.get("headers"),
        )


def test_fails_over_until_a_host_answers(caplog):
    handler, contacted = route(
        {
            "h1": timeout,
            "h2": httpx.Response(503, text="service unavailable"),
            "h3": httpx.Response(200, json={"hits": []}),
        }
    )

    with caplog.at_level(logging.WARNING, logger="algolia_search.transport"):
        result = dispatch(handler)

    assert result == {"hits": []}
    assert contacted == ["h1", "h2", "h3"]
    failures = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(failures) == 2


def test_client_error_is_terminal():
    handler, contacted = route(
        {
            "h1": httpx.Response(400, json={"message": "bad query"}),
            "h2": httpx.Response(200, json={}),
        }
    )

    with pytest.raises(ServiceError) as excinfo:
        dispatch(handler, hosts=["h1", "h2"])

    assert str(excinfo.value) == "bad query"
    assert excinfo.value.kind is ErrorKind.TERMINAL
    assert excinfo.value.status_code == 400
    assert contacted == ["h1"]


def test_client_error_without_message_uses_default():
    handler, _ = route({"h1": httpx.Response(404, json={"status": 404})})

    with pytest.raises(ServiceError, match="Error detected in backend"):
        dispatch(handler, hosts=["h1"])


def test_client_error_with_invalid_json_is_terminal():
    handler, contacted = route(
        {"h1": httpx.Response(403, text="forbidden"), "h2": httpx.Response(200, json={})}
    )

    with pytest.raises(ServiceError, match="^JSON decode error"):
        dispatch(handler, hosts=["h1", "h2"])
    assert contacted == ["h1"]


def test_unreadable_client_error_body_is_retried():
    handler, contacted = route(
        {
            "h1": httpx.Response(400, stream=BrokenStream()),
            "h2": httpx.Response(200, json={"ok": True}),
        }
    )

    assert dispatch(handler, hosts=["h1", "h2"]) == {"ok": True}
    assert contacted == ["h1", "h2"]


def corrupt_gzip(status):
    return httpx.Response(
        status,
        headers={"Content-Encoding": "gzip"},
        stream=GarbledStream(),
    )


def test_undecodable_server_error_body_fails_over():
    handler, contacted = route(
        {"h1": corrupt_gzip(502), "h2": httpx.Response(200, json={"ok": True})}
    )

    assert dispatch(handler, hosts=["h1", "h2"]) == {"ok": True}
    assert contacted == ["h1", "h2"]


def test_undecodable_success_body_is_retried():
    handler, _ = route({"h1": corrupt_gzip(200), "h2": corrupt_gzip(502)})

    with pytest.raises(ServiceError) as excinfo:
        dispatch(handler, hosts=["h1", "h2"])

    error = excinfo.value
    assert error.kind is ErrorKind.AGGREGATED
    assert error.diagnostics[0][0] == "h1"
    assert error.diagnostics[0][1].startswith("DecodingError=")
    assert error.diagnostics[1] == ("h2", "502")


def test_all_hosts_unreachable():
    handler, contacted = route({"h1": timeout, "h2": timeout, "h3": timeout})

    with pytest.raises(ServiceError) as excinfo:
        dispatch(handler)

    error = excinfo.value
    assert str(error) == (
        "Hosts unreachable: h1=ConnectTimeout=timed out, "
        "h2=ConnectTimeout=timed out, h3=ConnectTimeout=timed out"
    )
    assert error.kind is ErrorKind.AGGREGATED
    assert [host for host, _ in error.diagnostics] == ["h1", "h2", "h3"]
    assert contacted == ["h1", "h2", "h3"]


def test_server_errors_recorded_with_body_or_status():
    handler, _ = route(
        {
            "h1": httpx.Response(500, text="internal error"),
            "h2": httpx.Response(502, stream=BrokenStream()),
        }
    )

    with pytest.raises(ServiceError) as excinfo:
        dispatch(handler, hosts=["h1", "h2"])

    assert str(excinfo.value) == "Hosts unreachable: h1=internal error, h2=502"


def test_invalid_json_success_is_terminal():
    handler, contacted = route(
        {"h1": httpx.Response(200, text="<html>"), "h2": httpx.Response(200, json={})}
    )

    with pytest.raises(ServiceError) as excinfo:
        dispatch(handler, hosts=["h1", "h2"])

    assert str(excinfo.value).startswith("JSON decode error")
    assert excinfo.value.kind is ErrorKind.TERMINAL
    assert contacted == ["h1"]


def test_success_body_must_be_an_object():
    handler, _ = route({"h1": httpx.Response(200, json=[1, 2])})

    with pytest.raises(ServiceError, match="expected a JSON object"):
        dispatch(handler, hosts=["h1"])


def test_empty_host_list():
    handler, contacted = route({})

    with pytest.raises(ServiceError, match="^Hosts unreachable: $"):
        dispatch(handler, hosts=[])
    assert contacted == []


@pytest.mark.parametrize("method", ["HEAD", "OPTIONS", "TRACE", "PATCH", None])
def test_unsupported_method_never_contacts_hosts(method):
    handler, contacted = route({})

    with pytest.raises(ProgrammingError):
        dispatch(handler, method=method)
    assert contacted == []


@pytest.mark.parametrize("method", ["GET", "DELETE"])
def test_body_on_bodiless_method_rejected(method):
    handler, contacted = route({})

    with pytest.raises(ProgrammingError, match="cannot enclose entity"):
        dispatch(handler, method=method, body={"a": 1})
    assert contacted == []


def test_request_shape():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    dispatch(
        handler,
        method="post",
        path="/1/keys",
        body={"acl": ["search"]},
        hosts=["h1"],
        connect_timeout_ms=1500,
        socket_timeout_ms=5000,
        headers={"X-Custom": "1"},
    )

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://h1/1/keys"
    assert request.headers["Content-Type"] == "application/json; charset=UTF-8"
    assert request.headers["X-Custom"] == "1"
    assert request.content == b'{"acl": ["search"]}'
    timeouts = request.extensions["timeout"]
    assert timeouts["connect"] == 1.5
    assert timeouts["read"] == 5.0


def test_no_content_type_without_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    dispatch(handler, hosts=["h1"])
    assert "Content-Type" not in seen[0].headers


def test_timeout_budget():
    budget = TimeoutBudget()

    assert (budget.connect_ms, budget.socket_ms, budget.search_ms) == (2000, 30000, 5000)
    assert budget.socket_timeout_for(search=True) == 5000
    assert budget.socket_timeout_for(search=False) == 30000

    snapshot = budget.snapshot()
    budget.socket_ms = 1
    assert snapshot.socket_ms == 30000
