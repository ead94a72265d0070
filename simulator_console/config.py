"""
Upstream API configuration.

Centralizes the simulator backend base URL and endpoint paths so that
deployments only need to set environment variables.
"""

import os
from typing import Union

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Upstream base URL from environment
API_BASE_URL = os.getenv(
    "SIMULATOR_API_BASE_URL",
    os.getenv("API_BASE_URL", "http://127.0.0.1:9527/cm-simulator/api/v1"),
)

# Request timeout in seconds
REQUEST_TIMEOUT = float(os.getenv("SIMULATOR_TIMEOUT", "30.0"))

# Rows per page for the dependent collections, fixed per browser session
DEFAULT_PAGE_SIZE = int(os.getenv("CONSOLE_PAGE_SIZE", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Envelope code the upstream uses for success
SUCCESS_CODE = "200"


def _instance_path(instance_id: Union[int, str]) -> str:
    return f"/instance/{instance_id}"


API_ENDPOINTS = {
    "instance": {
        "query_page": "/instance/queryPage",
        "list": "/instance/list",
        "get_by_id": _instance_path,
        "add": "/instance/add",
        "edit": "/instance/edit",
    },
    "device": {
        "query_page": "/device/queryPage",
    },
    "station": {
        "query_page": "/rcstInfo/queryPage",
    },
}


def build_api_url(endpoint: str, base_url: str = API_BASE_URL) -> str:
    """
    Build the full upstream URL for an endpoint path.

    Usage:
        build_api_url(API_ENDPOINTS["instance"]["list"])
    """
    return f"{base_url.rstrip('/')}{endpoint}"
