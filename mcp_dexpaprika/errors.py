"""
Errors raised while serving DexPaprika tool calls.

Every error is logged once where it is detected and then raised unchanged, so
the MCP host sees a failed tool call carrying the message below.
"""

from typing import Optional

ENDPOINT_REMOVED_MESSAGE = (
    "This endpoint has been permanently removed. Please use network-specific endpoints instead. "
    "For example, use /networks/{network}/pools instead of /pools. "
    "Get available networks first using the getNetworks function."
)

RATE_LIMIT_MESSAGE = (
    "Rate limit exceeded. You have reached the maximum number of requests allowed for the free tier. "
    "To increase your rate limits and access additional features, please consider upgrading to a "
    "paid plan at https://docs.dexpaprika.com/"
)


class DexPaprikaError(Exception):
    """Base class for all errors surfaced to the MCP host."""


class ValidationError(DexPaprikaError):
    """Caller arguments are missing or invalid. Raised before any network call."""


class EndpointRemovedError(DexPaprikaError):
    """The API answered 410 Gone."""

    status_code = 410

    def __init__(self, message: str = ENDPOINT_REMOVED_MESSAGE):
        super().__init__(message)


class RateLimitError(DexPaprikaError):
    """The API answered 429 Too Many Requests."""

    status_code = 429

    def __init__(self, message: str = RATE_LIMIT_MESSAGE):
        super().__init__(message)


class RequestFailedError(DexPaprikaError):
    """Any other non-2xx answer."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"API request failed with status {status_code}")


class TransportError(DexPaprikaError):
    """The request never produced a usable JSON answer (connection or decode failure)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
