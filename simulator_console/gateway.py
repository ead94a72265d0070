"""
Simulator Gateway - Server-to-server communication with the cm-simulator backend.

This module handles:
- Forwarding requests to the upstream API
- Decoding the uniform {code, msg, data, cause} envelope
- Normalizing transport problems into a single exception type
"""

import logging
from typing import Any, Optional

import httpx

from simulator_console.config import (
    API_BASE_URL,
    API_ENDPOINTS,
    REQUEST_TIMEOUT,
    build_api_url,
)
from simulator_console.models import ApiEnvelope, InstanceCreate, InstanceEdit, PageQuery

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base class for failures talking to the simulator backend."""


class TransportFailure(GatewayError):
    """The call itself did not complete."""


class UpstreamFailure(GatewayError):
    """The call completed but the envelope code is not success."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @classmethod
    def from_envelope(cls, envelope: ApiEnvelope, fallback: str) -> "UpstreamFailure":
        return cls(envelope.code, envelope.error_message(fallback))


def unwrap(envelope: ApiEnvelope, fallback: str) -> Any:
    """Return the envelope payload, raising UpstreamFailure unless code is success."""
    if not envelope.ok:
        raise UpstreamFailure.from_envelope(envelope, fallback)
    return envelope.data


class SimulatorGateway:
    """Async client for the cm-simulator REST API."""

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the gateway.

        Args:
            base_url: The base URL of the upstream API.
            timeout: Request timeout in seconds.
            http_client: Optional pre-built client (tests pass one with a mock transport).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "SimulatorGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _get_headers(self) -> dict:
        return {"Content-Type": "application/json"}

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
    ) -> ApiEnvelope:
        """
        Forward one request upstream and decode the envelope.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the base URL.
            json: Optional JSON body.

        Returns:
            The decoded envelope, whatever its code.

        Raises:
            TransportFailure: on connection errors, timeouts, non-2xx HTTP
                status or a body that is not an envelope.
        """
        url = build_api_url(path, self.base_url)

        try:
            response = await self._client.request(
                method,
                url,
                json=json,
                headers=self._get_headers(),
            )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling {method} {path}")
            raise TransportFailure("Timeout connecting to simulator backend") from e
        except httpx.RequestError as e:
            logger.error(f"Error calling {method} {path}: {e}")
            raise TransportFailure(f"Connection error: {str(e)}") from e

        if not response.is_success:
            logger.error(f"Upstream {method} {path} returned status {response.status_code}")
            raise TransportFailure(f"HTTP error! status: {response.status_code}")

        try:
            return ApiEnvelope.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Malformed response from {method} {path}: {e}")
            raise TransportFailure(f"Malformed response: {str(e)}") from e

    async def list_instances(self) -> ApiEnvelope:
        return await self.request("GET", API_ENDPOINTS["instance"]["list"])

    async def query_instances(self, page_num: int, page_size: int) -> ApiEnvelope:
        return await self.request(
            "POST",
            API_ENDPOINTS["instance"]["query_page"],
            json={"pageNum": page_num, "pageSize": page_size},
        )

    async def get_instance(self, instance_id: int) -> ApiEnvelope:
        return await self.request("GET", API_ENDPOINTS["instance"]["get_by_id"](instance_id))

    async def add_instance(self, instance: InstanceCreate) -> ApiEnvelope:
        return await self.request(
            "POST",
            API_ENDPOINTS["instance"]["add"],
            json=instance.model_dump(by_alias=True),
        )

    async def edit_instance(self, instance: InstanceEdit) -> ApiEnvelope:
        return await self.request(
            "POST",
            API_ENDPOINTS["instance"]["edit"],
            json=instance.model_dump(by_alias=True),
        )

    async def query_devices(self, query: PageQuery) -> ApiEnvelope:
        return await self.request(
            "POST", API_ENDPOINTS["device"]["query_page"], json=query.to_wire()
        )

    async def query_stations(self, query: PageQuery) -> ApiEnvelope:
        return await self.request(
            "POST", API_ENDPOINTS["station"]["query_page"], json=query.to_wire()
        )
