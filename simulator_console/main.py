"""
Simulator Console - API proxy

Relays the console's requests to the cm-simulator backend and reshapes
transport failures into the uniform {code, msg, data, cause} envelope.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables
load_dotenv()

from simulator_console import __version__
from simulator_console.config import API_BASE_URL, LOG_LEVEL, REQUEST_TIMEOUT
from simulator_console.gateway import SimulatorGateway
from simulator_console.routers import devices_router, instances_router, stations_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup: open the upstream client unless one was injected
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = SimulatorGateway(API_BASE_URL, timeout=REQUEST_TIMEOUT)
    yield
    # Shutdown: release pooled connections
    await app.state.gateway.aclose()
    app.state.gateway = None


app = FastAPI(
    title="Simulator Console API",
    version=__version__,
    description="""
Administrative console over the cm-simulator backend. Proxies instance,
device and station queries to the upstream API.
    """,
    lifespan=lifespan,
)

# Include routers
app.include_router(instances_router)
app.include_router(devices_router)
app.include_router(stations_router)


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    debug = os.getenv("DEBUG", "true").lower() == "true"

    uvicorn.run("simulator_console.main:app", host=host, port=port, reload=debug)
