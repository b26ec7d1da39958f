from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode

import httpx
from mcp.server.fastmcp.utilities.logging import get_logger

from mcp_dexpaprika.config import API_BASE_URL
from mcp_dexpaprika.errors import (
    EndpointRemovedError,
    RateLimitError,
    RequestFailedError,
    TransportError,
)

logger = get_logger(__name__)


def encode_segment(value: str) -> str:
    """Percent-encodes a single path segment, including '/' and '?'."""
    return quote(str(value), safe="")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(query: Optional[Mapping[str, Any]]) -> str:
    """
    Serializes query parameters in insertion order.

    None values are dropped, booleans are rendered as true/false and every value
    is percent-encoded with no safe characters.
    """
    if not query:
        return ""
    pairs = [(key, _query_value(value)) for key, value in query.items() if value is not None]
    return urlencode(pairs, quote_via=quote)


class ApiGateway:
    """Issues GET requests against the DexPaprika API and classifies the outcome."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    @property
    def base_url(self) -> str:
        return API_BASE_URL

    def build_url(self, path: str, query: Optional[Mapping[str, Any]] = None) -> str:
        encoded = encode_query(query)
        url = f"{API_BASE_URL}{path}"
        return f"{url}?{encoded}" if encoded else url

    async def fetch_resource(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Fetches `path` with `query` and returns the parsed JSON body.

        Raises EndpointRemovedError (410), RateLimitError (429), RequestFailedError
        (other non-2xx) or TransportError (connection or JSON decode failure).
        """
        url = self.build_url(path, query)
        logger.debug(f"GET {url}")
        try:
            # No timeout: a slow answer holds the tool call open until the API replies.
            async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching from API ({path}): {e}")
            raise TransportError(f"Could not reach the DexPaprika API: {e}", cause=e) from e

        if response.status_code == 410:
            error = EndpointRemovedError()
            logger.error(f"Error fetching from API ({path}): {error}")
            raise error
        if response.status_code == 429:
            error = RateLimitError()
            logger.error(f"Error fetching from API ({path}): {error}")
            raise error
        if not response.is_success:
            error = RequestFailedError(response.status_code)
            logger.error(f"Error fetching from API ({path}): {error}")
            raise error

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Error fetching from API ({path}): invalid JSON body: {e}")
            raise TransportError(f"The DexPaprika API returned invalid JSON: {e}", cause=e) from e
