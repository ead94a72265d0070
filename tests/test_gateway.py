"""
Tests for the upstream gateway client
"""

import json

import httpx
import pytest

from conftest import BASE_URL, mock_gateway
from simulator_console.gateway import (
    SimulatorGateway,
    TransportFailure,
    UpstreamFailure,
    unwrap,
)
from simulator_console.models import ApiEnvelope, InstanceCreate, PageQuery


@pytest.mark.asyncio
async def test_request_decodes_envelope():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"code": "200", "msg": "success", "data": [{"id": 1}], "cause": None},
        )

    gateway = mock_gateway(handler)
    envelope = await gateway.list_instances()
    await gateway.aclose()

    assert envelope.ok
    assert envelope.data == [{"id": 1}]
    assert str(seen[0].url) == f"{BASE_URL}/instance/list"
    assert seen[0].method == "GET"


@pytest.mark.asyncio
async def test_numeric_code_is_normalized():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"code": 200, "msg": None, "data": None})

    async with mock_gateway(handler) as gateway:
        envelope = await gateway.list_instances()

    assert envelope.code == "200"
    assert envelope.msg == ""


@pytest.mark.asyncio
async def test_non_success_code_is_returned_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"code": "500", "msg": "instance not found", "data": None}
        )

    async with mock_gateway(handler) as gateway:
        envelope = await gateway.get_instance(9)

    assert not envelope.ok
    with pytest.raises(UpstreamFailure) as info:
        unwrap(envelope, "fallback")
    assert info.value.code == "500"
    assert info.value.message == "instance not found"


@pytest.mark.asyncio
async def test_http_error_status_is_a_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    async with mock_gateway(handler) as gateway:
        with pytest.raises(TransportFailure, match="status: 502"):
            await gateway.list_instances()


@pytest.mark.asyncio
async def test_connection_error_is_a_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with mock_gateway(handler) as gateway:
        with pytest.raises(TransportFailure, match="Connection error"):
            await gateway.list_instances()


@pytest.mark.asyncio
async def test_timeout_is_a_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    async with mock_gateway(handler) as gateway:
        with pytest.raises(TransportFailure, match="Timeout"):
            await gateway.list_instances()


@pytest.mark.asyncio
async def test_malformed_body_is_a_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    async with mock_gateway(handler) as gateway:
        with pytest.raises(TransportFailure, match="Malformed"):
            await gateway.list_instances()


@pytest.mark.asyncio
async def test_page_queries_omit_blank_owner():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append((request.url.path, json.loads(request.read())))
        return httpx.Response(200, json={"code": "200", "data": {"total": 0, "list": []}})

    async with mock_gateway(handler) as gateway:
        await gateway.query_devices(PageQuery(page_num=1, page_size=10, instance_id=""))
        await gateway.query_stations(PageQuery(page_num=2, page_size=10, instance_id=4))

    assert bodies[0][0].endswith("/device/queryPage")
    assert bodies[0][1] == {"pageNum": 1, "pageSize": 10}
    assert bodies[1][0].endswith("/rcstInfo/queryPage")
    assert bodies[1][1] == {"pageNum": 2, "pageSize": 10, "instanceId": 4}


@pytest.mark.asyncio
async def test_add_instance_sends_camel_case():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.read()))
        return httpx.Response(200, json={"code": "200", "msg": "success", "data": None})

    async with mock_gateway(handler) as gateway:
        await gateway.add_instance(InstanceCreate(http_ip="10.0.0.9"))

    assert bodies[0]["httpIp"] == "10.0.0.9"
    assert bodies[0]["httpPort"] == 80


def test_envelope_error_message_fallback():
    assert ApiEnvelope(code="500", msg="").error_message("fallback") == "fallback"
    assert ApiEnvelope(code="500", msg="boom").error_message("fallback") == "boom"


@pytest.mark.asyncio
async def test_trailing_slash_base_url_is_joined_once():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"code": "200", "msg": "", "data": None})

    gateway = SimulatorGateway(
        f"{BASE_URL}/",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    await gateway.get_instance(7)
    await gateway.aclose()

    assert str(seen[0].url) == f"{BASE_URL}/instance/7"
