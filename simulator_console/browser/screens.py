"""
Per-screen configuration of the resource browser and the small display
helpers the device and station screens share.
"""

from dataclasses import dataclass
from typing import Optional, Type

from pydantic import BaseModel

from simulator_console.config import API_ENDPOINTS, DEFAULT_PAGE_SIZE
from simulator_console.models import (
    CoordinateKind,
    DeviceState,
    SimulatorDevice,
    SimulatorStation,
)


@dataclass(frozen=True)
class ScreenConfig:
    resource_label: str
    query_path: str
    owner_field_name: str = "instanceId"
    page_size: int = DEFAULT_PAGE_SIZE
    item_model: Optional[Type[BaseModel]] = None

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    @property
    def failure_message(self) -> str:
        return f"Failed to load {self.resource_label}"


DEVICE_SCREEN = ScreenConfig(
    resource_label="devices",
    query_path=API_ENDPOINTS["device"]["query_page"],
    item_model=SimulatorDevice,
)

STATION_SCREEN = ScreenConfig(
    resource_label="stations",
    query_path=API_ENDPOINTS["station"]["query_page"],
    item_model=SimulatorStation,
)

SCREENS = {
    DEVICE_SCREEN.resource_label: DEVICE_SCREEN,
    STATION_SCREEN.resource_label: STATION_SCREEN,
}


_DEVICE_STATE_LABELS = {
    DeviceState.ON_LINE.value: "Online",
    DeviceState.OFF_LINE.value: "Offline",
    DeviceState.MAINTENANCE.value: "Maintenance",
}


def device_state_label(state: Optional[str]) -> str:
    return _DEVICE_STATE_LABELS.get(state or "", "Unknown")


def station_online_label(ip: Optional[str]) -> str:
    # A station only reports an IP once it has come online.
    return "Online" if ip else "Offline"


def format_coordinate(value: float, direction: int, kind: CoordinateKind) -> str:
    """
    Format a modem/satellite coordinate, e.g. ``116.4074°E``.

    Direction 0 means east (longitude) or north (latitude).
    """
    if kind == CoordinateKind.LON:
        suffix = "E" if direction == 0 else "W"
    else:
        suffix = "N" if direction == 0 else "S"
    return f"{abs(value):.4f}°{suffix}"
