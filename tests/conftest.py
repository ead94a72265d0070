"""Shared fixtures: a scripted gateway whose responses are released by the test."""

import asyncio
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx
import pytest

from simulator_console.gateway import SimulatorGateway
from simulator_console.models import ApiEnvelope

BASE_URL = "http://simulator.test/cm-simulator/api/v1"


def ok(data: Any) -> ApiEnvelope:
    return ApiEnvelope(code="200", msg="success", data=data)


def failed(msg: str, code: str = "500") -> ApiEnvelope:
    return ApiEnvelope(code=code, msg=msg, data=None)


def page(total: int, rows: List[dict]) -> ApiEnvelope:
    return ok({"total": total, "list": rows})


def device_rows(owner_id: int, count: int, start: int = 1) -> List[dict]:
    return [
        {"id": start + i, "instanceId": owner_id, "device": 100 + i, "state": "ON_LINE"}
        for i in range(count)
    ]


INSTANCES = [
    {"id": 1, "httpIp": "10.0.0.1", "httpPort": 8080, "enable": True},
    {"id": 2, "httpIp": "10.0.0.2", "httpPort": 8080, "enable": True},
    {"id": 3, "httpIp": "192.168.1.30", "httpPort": 80, "enable": False},
]


@dataclass
class PendingCall:
    method: str
    path: str
    json: Optional[Any]
    future: asyncio.Future = field(repr=False)

    def resolve(self, envelope: ApiEnvelope) -> None:
        self.future.set_result(envelope)

    def fail(self, error: BaseException) -> None:
        self.future.set_exception(error)


class ScriptedGateway:
    """Records every request and parks it until the test releases it."""

    def __init__(self):
        self.calls: List[PendingCall] = []

    async def request(self, method: str, path: str, json: Optional[Any] = None):
        future = asyncio.get_running_loop().create_future()
        self.calls.append(PendingCall(method, path, json, future))
        return await future

    async def list_instances(self):
        return await self.request("GET", "/instance/list")

    def pending(self, path: Optional[str] = None) -> List[PendingCall]:
        return [
            call
            for call in self.calls
            if not call.future.done() and (path is None or call.path == path)
        ]

    def page_calls(self) -> List[PendingCall]:
        return [call for call in self.calls if call.path.endswith("/queryPage")]

    def master_calls(self) -> List[PendingCall]:
        return [call for call in self.calls if call.path == "/instance/list"]


async def settle(rounds: int = 10) -> None:
    """Let scheduled tasks run up to their next await."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def scripted_gateway() -> ScriptedGateway:
    return ScriptedGateway()


def mock_gateway(handler) -> SimulatorGateway:
    """Gateway backed by an httpx mock transport."""
    return SimulatorGateway(
        BASE_URL,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
