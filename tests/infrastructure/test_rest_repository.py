"""REST Order Repository — request shape and error mapping against a mocked PostgREST.

Tests cover:
    - list/insert/update/delete hit the table with PostgREST query syntax and auth headers
    - transport failures map to ConnectivityError
    - HTTP errors map to ConnectivityError (list) or BackendError (writes), message verbatim
"""

import json

import httpx
import pytest

from printdesk.core.errors import BackendError, ConnectivityError
from printdesk.infrastructure.rest_repository import RestOrderRepository

BASE_URL = "https://demo.supabase.co"
KEY = "anon-test-key"


def _repo(handler, table="orders"):
    return RestOrderRepository(
        BASE_URL, KEY, table=table, transport=httpx.MockTransport(handler),
    )


class _Recorder:
    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


async def test_list_orders_requests_date_ascending_with_auth():
    rows = [{"id": "1", "name": "Banner"}]
    recorder = _Recorder(httpx.Response(200, json=rows))
    repo = _repo(recorder)

    assert await repo.list_orders() == rows

    req = recorder.requests[0]
    assert req.method == "GET"
    assert req.url.path == "/rest/v1/orders"
    assert req.url.params["order"] == "delivery_date.asc.nullslast"
    assert req.url.params["select"] == "*"
    assert req.headers["apikey"] == KEY
    assert req.headers["authorization"] == f"Bearer {KEY}"
    await repo.aclose()


async def test_list_orders_uses_configured_table():
    recorder = _Recorder(httpx.Response(200, json=[]))
    repo = _repo(recorder, table="pedidos")
    await repo.list_orders()
    assert recorder.requests[0].url.path == "/rest/v1/pedidos"


async def test_list_transport_failure_is_connectivity_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ConnectivityError) as exc:
        await _repo(handler).list_orders()
    assert exc.value.operation == "list"
    assert "connection refused" in exc.value.message


async def test_list_timeout_is_connectivity_error():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(ConnectivityError):
        await _repo(handler).list_orders()


async def test_list_http_error_is_connectivity_error_with_backend_message():
    recorder = _Recorder(httpx.Response(401, json={"message": "Invalid API key"}))
    with pytest.raises(ConnectivityError) as exc:
        await _repo(recorder).list_orders()
    assert exc.value.message == "Invalid API key"


async def test_list_non_list_body_is_connectivity_error():
    recorder = _Recorder(httpx.Response(200, json={"rows": []}))
    with pytest.raises(ConnectivityError):
        await _repo(recorder).list_orders()


async def test_insert_posts_fields():
    recorder = _Recorder(httpx.Response(201))
    fields = {"name": "Flyers", "total_price": 10.0, "status": "Received"}

    await _repo(recorder).insert(fields)

    req = recorder.requests[0]
    assert req.method == "POST"
    assert req.url.path == "/rest/v1/orders"
    assert req.headers["prefer"] == "return=minimal"
    assert json.loads(req.content) == fields


async def test_insert_rejection_is_backend_error_verbatim():
    recorder = _Recorder(httpx.Response(
        400, json={"code": "23502", "message": 'null value in column "name" violates not-null constraint'},
    ))
    with pytest.raises(BackendError) as exc:
        await _repo(recorder).insert({"name": None})
    assert exc.value.message == 'null value in column "name" violates not-null constraint'
    assert exc.value.operation == "insert"


async def test_update_patches_by_id():
    recorder = _Recorder(httpx.Response(204))
    await _repo(recorder).update_fields("ord-7", {"status": "Ready"})

    req = recorder.requests[0]
    assert req.method == "PATCH"
    assert req.url.params["id"] == "eq.ord-7"
    assert json.loads(req.content) == {"status": "Ready"}


async def test_delete_by_id():
    recorder = _Recorder(httpx.Response(204))
    await _repo(recorder).delete_by_id("ord-7")

    req = recorder.requests[0]
    assert req.method == "DELETE"
    assert req.url.params["id"] == "eq.ord-7"


async def test_write_transport_failure_is_connectivity_error():
    def handler(request):
        raise httpx.ConnectError("network unreachable", request=request)

    with pytest.raises(ConnectivityError) as exc:
        await _repo(handler).delete_by_id("ord-7")
    assert exc.value.context.order_id == "ord-7"
    assert exc.value.operation == "delete"


async def test_plain_text_error_body_is_used_as_message():
    recorder = _Recorder(httpx.Response(500, text="upstream exploded"))
    with pytest.raises(BackendError) as exc:
        await _repo(recorder).update_fields("ord-1", {"deposit": 5})
    assert exc.value.message == "upstream exploded"
