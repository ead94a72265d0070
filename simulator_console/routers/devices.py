"""
Device routes - master-station boards attached to instances
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from simulator_console.dependencies import get_gateway, relay
from simulator_console.gateway import SimulatorGateway
from simulator_console.models import PageQuery

router = APIRouter(prefix="/api/simulator", tags=["Devices"])


@router.post("/devices")
async def query_devices(
    query: PageQuery,
    gateway: SimulatorGateway = Depends(get_gateway),
) -> JSONResponse:
    """
    One page of devices.

    ``instanceId`` is forwarded only when present and non-empty; omitting it
    asks the upstream for devices of every instance.
    """
    return await relay(gateway.query_devices(query))
