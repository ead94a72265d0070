"""
Instance routes - pass-through to the upstream instance endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from simulator_console.dependencies import get_gateway, relay
from simulator_console.gateway import SimulatorGateway
from simulator_console.models import InstanceCreate, InstanceEdit, PageQuery

router = APIRouter(prefix="/api/simulator", tags=["Instances"])


@router.get("/instance-list")
async def list_instances(
    gateway: SimulatorGateway = Depends(get_gateway),
) -> JSONResponse:
    """
    Full, unpaginated instance list.

    Feeds the instance filter panel of the device and station screens.
    """
    return await relay(gateway.list_instances(), failure_data=[])


@router.post("/instances")
async def query_instances(
    query: PageQuery,
    gateway: SimulatorGateway = Depends(get_gateway),
) -> JSONResponse:
    """One page of instances."""
    return await relay(gateway.query_instances(query.page_num, query.page_size))


@router.get("/instance/{instance_id}")
async def get_instance(
    instance_id: int,
    gateway: SimulatorGateway = Depends(get_gateway),
) -> JSONResponse:
    return await relay(gateway.get_instance(instance_id))


@router.post("/instance/add")
async def add_instance(
    instance: InstanceCreate,
    gateway: SimulatorGateway = Depends(get_gateway),
) -> JSONResponse:
    return await relay(gateway.add_instance(instance))


@router.post("/instance/edit")
async def edit_instance(
    instance: InstanceEdit,
    gateway: SimulatorGateway = Depends(get_gateway),
) -> JSONResponse:
    return await relay(gateway.edit_instance(instance))
