"""
Dependent paginated resource browser shared by the device and station screens.
"""

from typing import Callable, Optional

from simulator_console.browser.controller import BrowserController
from simulator_console.browser.filtering import filter_items
from simulator_console.browser.master_list import MasterListStore
from simulator_console.browser.page_fetcher import DependentPageFetcher
from simulator_console.browser.screens import (
    DEVICE_SCREEN,
    SCREENS,
    STATION_SCREEN,
    ScreenConfig,
)
from simulator_console.browser.types import BrowserView, MasterItem, OwnerScope
from simulator_console.gateway import SimulatorGateway


def create_browser(
    gateway: SimulatorGateway,
    screen: ScreenConfig,
    on_change: Optional[Callable[[BrowserView], None]] = None,
) -> BrowserController:
    """Build a controller for one screen; call ``mount()`` from the event loop."""
    return BrowserController(gateway, screen, on_change=on_change)


__all__ = [
    "BrowserController",
    "BrowserView",
    "DEVICE_SCREEN",
    "DependentPageFetcher",
    "MasterItem",
    "MasterListStore",
    "OwnerScope",
    "SCREENS",
    "STATION_SCREEN",
    "ScreenConfig",
    "create_browser",
    "filter_items",
]
