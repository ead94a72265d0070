"""
Browser controller - coordinates the master list, the selected owner and the
paginated dependent collection of one screen.

Every user action returns immediately and schedules its requests on the
running event loop. Each dependent request carries a generation number;
only the result of the most recently minted generation reaches the visible
state. Superseded requests are never cancelled, their results are dropped.
"""

import asyncio
import logging
from typing import Callable, Coroutine, Optional, Set

from simulator_console.browser.master_list import MasterListStore
from simulator_console.browser.page_fetcher import DependentPageFetcher
from simulator_console.browser.screens import ScreenConfig
from simulator_console.browser.types import (
    BrowserView,
    DependentState,
    FetchResult,
    MasterStatus,
    OwnerScope,
    PageWindow,
    total_pages,
)
from simulator_console.gateway import SimulatorGateway

logger = logging.getLogger(__name__)


class BrowserController:
    """Dependent paginated resource browser for one screen."""

    def __init__(
        self,
        gateway: SimulatorGateway,
        screen: ScreenConfig,
        master: Optional[MasterListStore] = None,
        on_change: Optional[Callable[[BrowserView], None]] = None,
    ):
        self.screen = screen
        self.page_size = screen.page_size
        self.master = master or MasterListStore(gateway)
        self.fetcher = DependentPageFetcher(
            gateway,
            query_path=screen.query_path,
            latest_generation=lambda: self.generation,
            owner_field_name=screen.owner_field_name,
            item_model=screen.item_model,
            failure_message=screen.failure_message,
        )
        self.on_change = on_change

        self.selection: Optional[int] = None
        self.page_num = 1
        self.generation = 0
        self.query = ""
        self.dependent = DependentState()
        self._tasks: Set[asyncio.Task] = set()
        # Page of the last failed request, re-issued by retry_dependent()
        self._retry_page: Optional[int] = None

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return total_pages(self.dependent.total, self.page_size)

    @property
    def selection_enabled(self) -> bool:
        """Selecting a concrete owner needs a master list that loaded."""
        return self.master.status != MasterStatus.FAILED

    @property
    def busy(self) -> bool:
        return self.master.status == MasterStatus.LOADING or self.dependent.loading

    def owner_label(self, owner_id: Optional[int]) -> Optional[str]:
        """Display key of an owner, or its id when the owner is unknown."""
        if owner_id is None:
            return None
        item = self.master.find(owner_id)
        if item is not None and item.display_key:
            return item.display_key
        return str(owner_id)

    def view(self) -> BrowserView:
        return BrowserView(
            resource_label=self.screen.resource_label,
            query=self.query,
            masters=tuple(self.master.filtered_view(self.query)),
            master_status=self.master.status,
            master_error=self.master.error_message,
            selection=self.selection,
            selection_enabled=self.selection_enabled,
            owner_label=self.owner_label(self.selection),
            window=PageWindow(self.page_num, self.page_size, self.dependent.total),
            items=tuple(self.dependent.items),
            loading=self.dependent.loading,
            error=self.dependent.error,
            busy=self.busy,
        )

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def mount(self) -> None:
        self._mint()
        self._start_master_load()
        self._request_page()

    def select(self, owner_id: Optional[int]) -> bool:
        """
        Switch the owner filter and go back to page 1.

        Returns False when nothing was issued: the owner is already selected,
        or a concrete owner was requested while the master list is failed.
        """
        if owner_id == self.selection:
            return False
        if owner_id is not None and not self.selection_enabled:
            logger.info(f"Ignoring selection of {owner_id}: instance list unavailable")
            return False

        self.selection = owner_id
        self.page_num = 1
        self._retry_page = None
        self._mint()
        self._request_page()
        return True

    def change_page(self, page_num: int) -> bool:
        if not 1 <= page_num <= self.total_pages or page_num == self.page_num:
            return False

        self.page_num = page_num
        self._retry_page = None
        self._mint()
        self._request_page()
        return True

    def next_page(self) -> bool:
        return self.change_page(self.page_num + 1)

    def previous_page(self) -> bool:
        return self.change_page(self.page_num - 1)

    def refresh(self) -> None:
        """Reload both panels, keeping the selection and page."""
        self._mint()
        self._start_master_load()
        self._request_page()

    def retry_master(self) -> None:
        self._start_master_load()
        self._notify()

    def retry_dependent(self) -> None:
        """Re-issue the request that failed, including its page."""
        if self._retry_page is not None:
            self.page_num = self._retry_page
            self._retry_page = None
        self._mint()
        self._request_page()

    def set_query(self, query: str) -> None:
        self.query = query
        self._notify()

    def clear_query(self) -> None:
        self.set_query("")

    async def wait_idle(self) -> None:
        """Wait for every outstanding request, including follow-ups they schedule."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _mint(self) -> int:
        self.generation += 1
        return self.generation

    def _spawn(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.view())

    def _start_master_load(self) -> None:
        self.master.begin()
        self._spawn(self._load_master())

    async def _load_master(self) -> None:
        await self.master.load()
        self._notify()

    def _request_page(self, corrective: bool = False) -> None:
        """Fetch the current selection/page under the current generation."""
        self.dependent.loading = True
        self.dependent.error = None
        self._spawn(
            self._fetch(
                OwnerScope.from_selection(self.selection),
                self.page_num,
                self.generation,
                corrective,
            )
        )
        self._notify()

    async def _fetch(
        self,
        scope: OwnerScope,
        page_num: int,
        generation: int,
        corrective: bool,
    ) -> None:
        result = await self.fetcher.fetch_page(scope, page_num, self.page_size, generation)
        self._apply(result, page_num, corrective)

    def _apply(self, result: FetchResult, page_num: int, corrective: bool) -> None:
        if not result.applied:
            return

        self.dependent.loading = False
        if result.error is not None:
            self.dependent.items = ()
            self.dependent.total = 0
            self.dependent.error = result.error
            # Keep the pager in range; retry_dependent() goes back to page_num
            self._retry_page = page_num
            self.page_num = min(self.page_num, self.total_pages)
            self._notify()
            return

        self.dependent.items = tuple(result.items)
        self.dependent.total = result.total
        self.dependent.error = None
        self._retry_page = None

        last_page = self.total_pages
        if last_page < self.page_num and not corrective:
            logger.debug(
                f"Page {self.page_num} is past the last page {last_page}, clamping"
            )
            self.page_num = last_page
            self._mint()
            self._request_page(corrective=True)
            return

        self._notify()
