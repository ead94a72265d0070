"""
Dependent page fetcher - one server-paginated query per call, reconciled
against the caller's latest generation when the response arrives.
"""

import logging
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from simulator_console.browser.types import FetchResult, OwnerScope
from simulator_console.gateway import GatewayError, SimulatorGateway, unwrap
from simulator_console.models import PageResult

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to load data"


def build_page_query(
    scope: OwnerScope,
    page_num: int,
    page_size: int,
    owner_field_name: str,
) -> Dict[str, Any]:
    """
    Build the page query body.

    The owner field is omitted entirely when querying across all owners.
    """
    query: Dict[str, Any] = {"pageNum": page_num, "pageSize": page_size}
    if not scope.is_all:
        query[owner_field_name] = scope.owner_id
    return query


class DependentPageFetcher:
    """Fetches pages of a dependent collection for one screen."""

    def __init__(
        self,
        gateway: SimulatorGateway,
        query_path: str,
        latest_generation: Callable[[], int],
        owner_field_name: str = "instanceId",
        item_model: Optional[Type[BaseModel]] = None,
        failure_message: str = FETCH_FAILED_MESSAGE,
    ):
        """
        Args:
            gateway: Upstream gateway.
            query_path: queryPage endpoint of the dependent collection.
            latest_generation: Returns the caller's most recently minted generation.
            owner_field_name: Wire name of the owner constraint.
            item_model: Optional model each row is parsed into.
            failure_message: Shown when the upstream gives no message.
        """
        self._gateway = gateway
        self.query_path = query_path
        self._latest_generation = latest_generation
        self.owner_field_name = owner_field_name
        self.item_model = item_model
        self.failure_message = failure_message

    def _is_current(self, generation: int) -> bool:
        return generation == self._latest_generation()

    async def fetch_page(
        self,
        scope: OwnerScope,
        page_num: int,
        page_size: int,
        generation: int,
    ) -> FetchResult:
        """
        Issue exactly one page request; no retry.

        Both successes and failures of superseded generations come back as
        stale so they can never overwrite a fresher result or error.
        """
        body = build_page_query(scope, page_num, page_size, self.owner_field_name)

        try:
            envelope = await self._gateway.request("POST", self.query_path, json=body)
            page = PageResult.model_validate(unwrap(envelope, self.failure_message))
            items = [self._parse(row) for row in page.items]
        except GatewayError as e:
            error = str(e) or self.failure_message
        except ValidationError as e:
            logger.error(f"Malformed page from {self.query_path}: {e}")
            error = self.failure_message
        else:
            if not self._is_current(generation):
                logger.debug(f"Discarding stale page {page_num} (generation {generation})")
                return FetchResult.superseded()
            return FetchResult(applied=True, items=items, total=page.total)

        if not self._is_current(generation):
            logger.debug(f"Discarding stale failure (generation {generation}): {error}")
            return FetchResult.superseded()
        logger.warning(f"Page {page_num} of {self.query_path} failed: {error}")
        return FetchResult(applied=True, error=error)

    def _parse(self, row: Any) -> Any:
        if self.item_model is None:
            return row
        return self.item_model.model_validate(row)
