"""
Master list store - the full, unpaginated instance collection.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from simulator_console.browser.filtering import filter_items
from simulator_console.browser.types import MasterItem, MasterListState, MasterStatus
from simulator_console.gateway import GatewayError, SimulatorGateway, unwrap
from simulator_console.models import SimulatorInstance

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load instances"


def instance_to_master(record: Any) -> MasterItem:
    """Adapt one upstream instance record to a master item keyed by its IP."""
    instance = SimulatorInstance.model_validate(record)
    return MasterItem(
        id=instance.id,
        display_key=instance.http_ip,
        enabled=instance.enable,
        metadata=instance,
    )


class MasterListStore:
    """
    Single owner of the master items and their load state.

    Reloads are not deduplicated: the last load to complete wins.
    """

    def __init__(
        self,
        gateway: SimulatorGateway,
        to_master: Callable[[Any], MasterItem] = instance_to_master,
    ):
        self._gateway = gateway
        self._to_master = to_master
        self.status = MasterStatus.IDLE
        self.items: List[MasterItem] = []
        self.error_message: Optional[str] = None

    @property
    def state(self) -> MasterListState:
        return MasterListState(
            status=self.status,
            items=tuple(self.items),
            error_message=self.error_message,
        )

    def begin(self) -> None:
        """Enter LOADING ahead of a load() that has not started yet."""
        self.status = MasterStatus.LOADING
        self.error_message = None

    async def load(self) -> MasterListState:
        """Fetch the whole collection, replacing items or clearing them on failure."""
        self.begin()

        try:
            envelope = await self._gateway.list_instances()
            data = unwrap(envelope, LOAD_FAILED_MESSAGE)
            items = [self._to_master(record) for record in data or []]
        except GatewayError as e:
            logger.warning(f"Instance list load failed: {e}")
            self._fail(str(e) or LOAD_FAILED_MESSAGE)
        except (TypeError, ValueError) as e:
            logger.error(f"Malformed instance list: {e}")
            self._fail(LOAD_FAILED_MESSAGE)
        else:
            self.items = items
            self.status = MasterStatus.READY
            logger.debug(f"Loaded {len(items)} instances")

        return self.state

    def _fail(self, message: str) -> None:
        self.items = []
        self.error_message = message
        self.status = MasterStatus.FAILED

    def filtered_view(self, query: Optional[str]) -> Sequence[MasterItem]:
        return filter_items(self.items, query)

    def find(self, owner_id: int) -> Optional[MasterItem]:
        for item in self.items:
            if item.id == owner_id:
                return item
        return None
