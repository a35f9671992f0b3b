"""Tests for APIExecutor.execute_fetch against a local aiohttp server."""

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from core.domain.enums import CallStatus, IntegrationStatus
from execution_layer import APIExecutor, ExecutionOptions, HTTPStatusError


@pytest_asyncio.fixture
async def provider_server():
    """Fake provider: /flaky fails once with 500, /missing is 404, /echo echoes JSON."""
    calls = {"flaky": 0}

    async def flaky(request: web.Request) -> web.Response:
        calls["flaky"] += 1
        if calls["flaky"] == 1:
            return web.json_response({"error": "boom"}, status=500)
        return web.json_response({"ok": True})

    async def missing(request: web.Request) -> web.Response:
        return web.json_response({"message": "Transaction not found"}, status=404)

    async def echo(request: web.Request) -> web.Response:
        body = await request.json()
        return web.json_response(
            {
                "method": request.method,
                "body": body,
                "auth": request.headers.get("Authorization"),
                "currency": request.query.get("currency"),
            }
        )

    async def empty(request: web.Request) -> web.Response:
        return web.Response(status=204)

    app = web.Application()
    app.router.add_get("/flaky", flaky)
    app.router.add_get("/missing", missing)
    app.router.add_post("/echo", echo)
    app.router.add_delete("/empty", empty)

    server = TestServer(app)
    await server.start_server()
    yield server, calls
    await server.close()


@pytest.mark.asyncio
async def test_fetch_retries_http_500_then_succeeds(executor: APIExecutor, registry, provider_server):
    """Test paystack 500-then-200 with max_retries=1."""
    server, calls = provider_server

    result = await executor.execute_fetch(
        "paystack",
        str(server.make_url("/flaky")),
        options=ExecutionOptions(max_retries=1, retry_delay_seconds=0),
    )

    assert result.success is True
    assert result.retry_count == 1
    assert result.data == {"ok": True}
    assert calls["flaky"] == 2
    assert registry.get_integration("paystack").status == IntegrationStatus.CONNECTED

    logs = executor.get_api_call_logs("paystack")
    assert [log.status for log in logs] == [CallStatus.SUCCESS, CallStatus.RETRY]
    assert logs[1].status_code == 500
    assert logs[1].error_message.startswith("HTTP 500")
    assert logs[0].method == "GET"
    assert logs[0].endpoint.endswith("/flaky")


@pytest.mark.asyncio
async def test_fetch_non_2xx_exhausts_with_status_code(executor: APIExecutor, registry, provider_server):
    server, _ = provider_server

    result = await executor.execute_fetch(
        "paystack",
        str(server.make_url("/missing")),
        options=ExecutionOptions(max_retries=0),
    )

    assert result.success is False
    assert result.error.status_code == 404
    assert result.error.message == "HTTP 404: Not Found"
    assert isinstance(result.error.original_error, HTTPStatusError)
    assert registry.get_integration("paystack").last_error == "HTTP 404: Not Found"

    terminal = executor.get_api_call_logs("paystack")[0]
    assert terminal.status == CallStatus.ERROR
    assert terminal.status_code == 404


@pytest.mark.asyncio
async def test_fetch_sends_body_headers_and_params(executor: APIExecutor, provider_server):
    server, _ = provider_server

    async with aiohttp.ClientSession() as session:
        result = await executor.execute_fetch(
            "paystack",
            str(server.make_url("/echo")),
            method="post",
            headers={"Authorization": "Bearer sk_test_456"},
            params={"currency": "GHS"},
            json={"amount": 5000, "email": "buyer@example.com"},
            session=session,
        )

    assert result.success is True
    assert result.data == {
        "method": "POST",
        "body": {"amount": 5000, "email": "buyer@example.com"},
        "auth": "Bearer sk_test_456",
        "currency": "GHS",
    }
    assert executor.get_api_call_logs("paystack")[0].method == "POST"


@pytest.mark.asyncio
async def test_fetch_empty_body_yields_none(executor: APIExecutor, provider_server):
    server, _ = provider_server

    result = await executor.execute_fetch(
        "paystack", str(server.make_url("/empty")), method="DELETE"
    )

    assert result.success is True
    assert result.data is None


@pytest.mark.asyncio
async def test_fetch_not_ready_integration_makes_no_request(executor: APIExecutor, provider_server):
    server, calls = provider_server

    result = await executor.execute_fetch("google_maps", str(server.make_url("/flaky")))

    assert result.success is False
    assert calls["flaky"] == 0
