# =============================================================================
# tools/handlers/base.py  -  Ordiscan handler base class
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Every Ordiscan tool is a subclass of OrdiscanTool.  The base class owns
#   the parts that are identical for all of them:
#
#     1. pick the API key (argument → configured key → ORDISCAN_API_KEY)
#     2. validate/normalize the arguments            (subclass: parse)
#     3. GET {base_url}{path}?{query} with a bearer   (subclass: path, query)
#     4. unwrap the {"data": ...} envelope
#     5. build the human-readable view               (subclass: format)
#
#   Subclasses only describe WHAT to call and HOW to present the result.
#
# ERRORS ARE DATA:
#   Handlers never raise for a remote problem.  Like the other tools in this
#   server they return {"error": ...} dicts so the MCP client sees a normal
#   tool result it can explain to the user:
#     - missing key      → {"error": "API key is required. ..."}
#     - bad argument     → {"error": "<what is wrong>"}
#     - non-2xx response → {"error": "API request failed: 404 Not Found",
#                           "details": "<response body>"}
#     - network failure  → {"error": "<urlopen error ...>"}
#     - odd 2xx payload  → {"error": "Unexpected response from Ordiscan API: ..."}
#
# HTTP:
#   urllib.request in a worker thread.  One request per call (two for
#   ordiscan_main), no retries, no response caching.
# =============================================================================

import asyncio
import json
import logging
import os
from typing import Any, Optional
from urllib.error import HTTPError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen

from core.config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

API_KEY_REQUIRED = (
    "API key is required. Either provide it as a parameter or set "
    "ORDISCAN_API_KEY environment variable."
)
SORT_ORDERS = ("newest", "oldest")


class ArgumentError(ValueError):
    """A tool argument is missing or malformed."""


class OrdiscanAPIError(Exception):
    """The Ordiscan API answered with a non-2xx status."""

    def __init__(self, status: int, reason: str, details: str):
        self.status = status
        self.reason = reason
        self.details = details
        super().__init__(f"API request failed: {status} {reason}")


def _http_get(url: str, headers: dict[str, str], timeout: float) -> Any:
    request = Request(url, headers=headers)
    with urlopen(request, timeout=timeout) as response:
        return json.loads(response.read().decode("utf-8"))


# -----------------------------------------------------------------------------
# Argument helpers (shared by every handler's parse())
# -----------------------------------------------------------------------------

def require(arguments: dict, key: str) -> str:
    value = arguments.get(key)
    if value is None or str(value).strip() == "":
        raise ArgumentError(f"{key} is required")
    return str(value).strip()


def optional_int(arguments: dict, key: str) -> Optional[int]:
    """Accept an int or a numeric string; anything else counts as absent."""
    value = arguments.get(key)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def optional_sort(arguments: dict) -> Optional[str]:
    value = arguments.get("sort")
    if not value:
        return None
    if value not in SORT_ORDERS:
        raise ArgumentError(f"Value must be one of: {', '.join(SORT_ORDERS)}")
    return value


def drop_none(params: dict) -> dict:
    return {key: value for key, value in params.items() if value is not None}


# -----------------------------------------------------------------------------
# OrdiscanTool
# -----------------------------------------------------------------------------

class OrdiscanTool:
    """Base class for one Ordiscan API capability."""

    name = ""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def execute(self, **arguments: Any) -> dict:
        api_key = (
            arguments.pop("api_key", None)
            or self.api_key
            or os.environ.get("ORDISCAN_API_KEY")
        )
        if not api_key:
            return {"error": API_KEY_REQUIRED}

        try:
            params = self.parse(arguments)
        except ArgumentError as exc:
            return {"error": str(exc)}

        try:
            data = await self.fetch(api_key, params)
        except OrdiscanAPIError as exc:
            return {"error": str(exc), "details": exc.details}
        except (OSError, ValueError) as exc:
            logger.warning(f"{self.name}: request failed: {exc}")
            return {"error": str(exc)}

        try:
            formatted = self.format(data, params)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            # A 2xx answer whose payload does not have the expected shape.
            logger.warning(f"{self.name}: unexpected response: {exc!r}")
            return {"error": f"Unexpected response from Ordiscan API: {exc}"}

        return {"success": True, "data": data, "formatted": formatted}

    # --- hooks for subclasses ---------------------------------------------

    def parse(self, arguments: dict) -> dict:
        return dict(arguments)

    def path(self, params: dict) -> str:
        raise NotImplementedError

    def query(self, params: dict) -> dict:
        return {}

    async def fetch(self, api_key: str, params: dict) -> Any:
        return await self.get(api_key, self.path(params), self.query(params))

    def format(self, data: Any, params: dict) -> Any:
        return data

    # --- HTTP ---------------------------------------------------------------

    async def get(self, api_key: str, path: str, query: Optional[dict] = None) -> Any:
        url = self.base_url + path
        if query:
            url = f"{url}?{urlencode(query)}"
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        try:
            payload = await asyncio.to_thread(_http_get, url, headers, self.timeout)
        except HTTPError as exc:
            details = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
            raise OrdiscanAPIError(exc.code, exc.reason, details) from exc

        if isinstance(payload, dict) and "data" in payload:
            return payload["data"]
        return payload


def segment(value: Any) -> str:
    """Quote a user-supplied value for use as one URL path segment."""
    return quote(str(value), safe=":")
