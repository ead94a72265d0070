"""
Shared route dependencies: the upstream gateway and envelope relaying
"""

import logging
from typing import Any, Awaitable

from fastapi import Request
from fastapi.responses import JSONResponse

from simulator_console.gateway import SimulatorGateway, TransportFailure
from simulator_console.models import ApiEnvelope

logger = logging.getLogger(__name__)


def get_gateway(request: Request) -> SimulatorGateway:
    """
    Dependency that provides the gateway opened by the application lifespan.

    Usage:
        @router.get("/example")
        async def example(gateway: SimulatorGateway = Depends(get_gateway)):
            ...
    """
    return request.app.state.gateway


async def relay(call: Awaitable[ApiEnvelope], failure_data: Any = None) -> JSONResponse:
    """
    Relay an upstream envelope verbatim.

    When the upstream call does not complete, answer with a 500 envelope
    carrying the failure message instead.
    """
    try:
        envelope = await call
    except TransportFailure as e:
        logger.error(f"Simulator API proxy error: {e}")
        return JSONResponse(
            status_code=500,
            content=ApiEnvelope.failure(str(e), failure_data).model_dump(),
        )
    return JSONResponse(content=envelope.model_dump())
