"""
Routers Package
"""

from simulator_console.routers.devices import router as devices_router
from simulator_console.routers.instances import router as instances_router
from simulator_console.routers.stations import router as stations_router

__all__ = [
    "devices_router",
    "instances_router",
    "stations_router",
]
