"""
Station routes - terminal stations (rcst) attached to instances
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from simulator_console.dependencies import get_gateway, relay
from simulator_console.gateway import SimulatorGateway
from simulator_console.models import PageQuery

router = APIRouter(prefix="/api/simulator", tags=["Stations"])


@router.post("/stations")
async def query_stations(
    query: PageQuery,
    gateway: SimulatorGateway = Depends(get_gateway),
) -> JSONResponse:
    """One page of stations, optionally restricted to one instance."""
    return await relay(gateway.query_stations(query))
