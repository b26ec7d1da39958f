"""
Operation registry for the DexPaprika tools.

Each operation pairs a parameter model (types, defaults, constraints) with a
request builder that turns validated parameters into an encoded path and query.
The registry is built once at startup and handed to the Dispatcher, which is the
only thing the MCP tools talk to.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated, Any, Callable, Dict, Iterable, Iterator, Literal, Optional, Tuple, Type

from mcp.server.fastmcp.utilities.logging import get_logger
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError

from mcp_dexpaprika.errors import ValidationError
from mcp_dexpaprika.gateway import ApiGateway, encode_segment

logger = get_logger(__name__)

# --- Parameter Types ---

DEFAULT_PAGE = 0
DEFAULT_LIMIT = 10
MAX_PAGE_LIMIT = 100
DEFAULT_OHLCV_LIMIT = 1
MAX_OHLCV_LIMIT = 366
DEFAULT_SORT = "desc"
DEFAULT_ORDER_BY = "volume_usd"
DEFAULT_INTERVAL = "24h"

SORT_ORDERS = ("asc", "desc")
ORDER_BY_FIELDS = ("volume_usd", "price_usd", "transactions", "last_price_change_usd_24h", "created_at")
OHLCV_INTERVALS = ("1m", "5m", "10m", "15m", "30m", "1h", "6h", "12h", "24h")

_Identifier = StringConstraints(strip_whitespace=True, min_length=1)


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; True must not turn into page 1.
    if isinstance(value, bool):
        raise ValueError("Input should be a number, not a boolean")
    return value


_Number = BeforeValidator(_reject_bool)

NetworkId = Annotated[
    str, _Identifier, Field(description='Network ID from getNetworks (e.g., "ethereum", "solana")')
]
DexId = Annotated[
    str, _Identifier, Field(description='DEX identifier from getNetworkDexes (e.g., "uniswap_v3")')
]
PoolAddress = Annotated[str, _Identifier, Field(description="Pool address or identifier")]
TokenAddress = Annotated[str, _Identifier, Field(description="Token address or identifier")]
Page = Annotated[int, _Number, Field(ge=0, description="Page number for pagination")]
PageLimit = Annotated[
    int,
    _Number,
    Field(ge=1, le=MAX_PAGE_LIMIT, description=f"Number of items per page (max {MAX_PAGE_LIMIT})"),
]
SortOrder = Annotated[Literal["asc", "desc"], Field(description="Sort order")]
OrderBy = Annotated[
    Literal["volume_usd", "price_usd", "transactions", "last_price_change_usd_24h", "created_at"],
    Field(description="Field to order by"),
]
Inversed = Annotated[bool, Field(description="Whether to invert the price ratio")]
Reorder = Annotated[
    Optional[bool],
    Field(
        description="If true, reorders the pool so that the specified token becomes the primary "
        "token for all metrics"
    ),
]
FilterAddress = Annotated[
    Optional[str], Field(description="Filter pools that contain this additional token address")
]
StartTime = Annotated[
    str,
    _Identifier,
    Field(
        description="Start time for historical data (Unix timestamp, RFC3339 timestamp, "
        "or yyyy-mm-dd format)"
    ),
]
EndTime = Annotated[
    Optional[str], Field(description="End time for historical data (max 1 year from start)")
]
OhlcvLimit = Annotated[
    int,
    _Number,
    Field(
        ge=1,
        le=MAX_OHLCV_LIMIT,
        description=f"Number of data points to retrieve (max {MAX_OHLCV_LIMIT})",
    ),
]
Interval = Annotated[
    Literal["1m", "5m", "10m", "15m", "30m", "1h", "6h", "12h", "24h"],
    Field(description="Interval granularity: 1m, 5m, 10m, 15m, 30m, 1h, 6h, 12h, 24h"),
]
Cursor = Annotated[
    Optional[str], Field(description="Transaction ID used for cursor-based pagination")
]
SearchQuery = Annotated[
    str, Field(description='Search term (e.g., "uniswap", "bitcoin", or a token address)')
]

# --- Parameter Models ---


class OperationParams(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, coerce_numbers_to_str=True)


class NoParams(OperationParams):
    pass


class NetworkDexesParams(OperationParams):
    network: NetworkId
    page: Page = DEFAULT_PAGE
    limit: PageLimit = DEFAULT_LIMIT


class NetworkPoolsParams(OperationParams):
    network: NetworkId
    page: Page = DEFAULT_PAGE
    limit: PageLimit = DEFAULT_LIMIT
    sort: SortOrder = DEFAULT_SORT
    orderBy: OrderBy = DEFAULT_ORDER_BY


class DexPoolsParams(NetworkPoolsParams):
    dex: DexId


class PoolDetailsParams(OperationParams):
    network: NetworkId
    poolAddress: PoolAddress
    inversed: Inversed = False


class TokenDetailsParams(OperationParams):
    network: NetworkId
    tokenAddress: TokenAddress


class TokenPoolsParams(NetworkPoolsParams):
    tokenAddress: TokenAddress
    reorder: Reorder = None
    address: FilterAddress = None


class PoolOHLCVParams(OperationParams):
    network: NetworkId
    poolAddress: PoolAddress
    start: StartTime
    end: EndTime = None
    limit: OhlcvLimit = DEFAULT_OHLCV_LIMIT
    interval: Interval = DEFAULT_INTERVAL
    inversed: Inversed = False


class PoolTransactionsParams(OperationParams):
    network: NetworkId
    poolAddress: PoolAddress
    page: Page = DEFAULT_PAGE
    limit: PageLimit = DEFAULT_LIMIT
    cursor: Cursor = None


class SearchParams(OperationParams):
    query: SearchQuery

    @field_validator("query")
    @classmethod
    def _strip_query(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Search query cannot be empty")
        return value


# --- Request Builders ---

RequestLine = Tuple[str, Dict[str, Any]]


def _network_path(network: str) -> str:
    return f"/networks/{encode_segment(network)}"


def _listing_query(params: NetworkPoolsParams) -> Dict[str, Any]:
    return {
        "page": params.page,
        "limit": params.limit,
        "sort": params.sort,
        "order_by": params.orderBy,
    }


def _optional(value: Optional[str]) -> Optional[str]:
    # Blank free-text values are treated as not supplied.
    return value if value else None


def _networks_request(params: NoParams) -> RequestLine:
    return "/networks", {}


def _network_dexes_request(params: NetworkDexesParams) -> RequestLine:
    path = f"{_network_path(params.network)}/dexes"
    return path, {"page": params.page, "limit": params.limit}


def _network_pools_request(params: NetworkPoolsParams) -> RequestLine:
    return f"{_network_path(params.network)}/pools", _listing_query(params)


def _dex_pools_request(params: DexPoolsParams) -> RequestLine:
    path = f"{_network_path(params.network)}/dexes/{encode_segment(params.dex)}/pools"
    return path, _listing_query(params)


def _pool_details_request(params: PoolDetailsParams) -> RequestLine:
    path = f"{_network_path(params.network)}/pools/{encode_segment(params.poolAddress)}"
    return path, {"inversed": params.inversed}


def _token_details_request(params: TokenDetailsParams) -> RequestLine:
    return f"{_network_path(params.network)}/tokens/{encode_segment(params.tokenAddress)}", {}


def _token_pools_request(params: TokenPoolsParams) -> RequestLine:
    path = f"{_network_path(params.network)}/tokens/{encode_segment(params.tokenAddress)}/pools"
    query = _listing_query(params)
    query["reorder"] = params.reorder
    query["address"] = _optional(params.address)
    return path, query


def _pool_ohlcv_request(params: PoolOHLCVParams) -> RequestLine:
    path = f"{_network_path(params.network)}/pools/{encode_segment(params.poolAddress)}/ohlcv"
    return path, {
        "start": params.start,
        "interval": params.interval,
        "limit": params.limit,
        "inversed": params.inversed,
        "end": _optional(params.end),
    }


def _pool_transactions_request(params: PoolTransactionsParams) -> RequestLine:
    path = f"{_network_path(params.network)}/pools/{encode_segment(params.poolAddress)}/transactions"
    return path, {"page": params.page, "limit": params.limit, "cursor": _optional(params.cursor)}


def _search_request(params: SearchParams) -> RequestLine:
    return "/search", {"query": params.query}


def _stats_request(params: NoParams) -> RequestLine:
    return "/stats", {}


# --- Registry ---


def _describe_errors(error: PydanticValidationError) -> str:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "arguments"
        problems.append(f"{location}: {detail['msg']}")
    return "; ".join(problems)


@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    params: Type[OperationParams]
    build_request: Callable[[Any], RequestLine]

    def validate(self, arguments: Optional[Mapping] = None) -> OperationParams:
        """Coerces arguments to the declared types and fills in defaults. None means omitted."""
        supplied = {key: value for key, value in (arguments or {}).items() if value is not None}
        try:
            return self.params.model_validate(supplied)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid arguments for {self.name}: {_describe_errors(e)}") from e


class OperationRegistry(Mapping):
    """Read-only mapping of operation name to Operation."""

    def __init__(self, operations: Iterable[Operation]):
        table: Dict[str, Operation] = {}
        for operation in operations:
            if operation.name in table:
                raise ValueError(f"Duplicate operation name: {operation.name}")
            table[operation.name] = operation
        self._operations = MappingProxyType(table)

    def __getitem__(self, name: str) -> Operation:
        return self._operations[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)


def build_registry() -> OperationRegistry:
    return OperationRegistry([
        Operation(
            name="getNetworks",
            description=(
                "REQUIRED FIRST STEP: Get all supported blockchain networks. Always call this first to see "
                "available networks before using any network-specific functions. Returns network IDs like "
                '"ethereum", "solana", etc.'
            ),
            params=NoParams,
            build_request=_networks_request,
        ),
        Operation(
            name="getNetworkDexes",
            description="Get available DEXes on a specific network. First call getNetworks to see valid network IDs.",
            params=NetworkDexesParams,
            build_request=_network_dexes_request,
        ),
        Operation(
            name="getNetworkPools",
            description=(
                "PRIMARY POOL FUNCTION: Get top liquidity pools on a specific network. This is the MAIN way to "
                "get pool data - there is NO global pools function. Use this instead of any \"getTopPools\" or "
                "\"getAllPools\" concepts."
            ),
            params=NetworkPoolsParams,
            build_request=_network_pools_request,
        ),
        Operation(
            name="getDexPools",
            description=(
                "Get pools from a specific DEX on a network. First use getNetworks, then getNetworkDexes to "
                "find valid DEX IDs."
            ),
            params=DexPoolsParams,
            build_request=_dex_pools_request,
        ),
        Operation(
            name="getPoolDetails",
            description=(
                "Get detailed information about a specific pool. Requires network ID from getNetworks and a "
                "pool address."
            ),
            params=PoolDetailsParams,
            build_request=_pool_details_request,
        ),
        Operation(
            name="getTokenDetails",
            description=(
                "Get detailed information about a specific token on a network. First use getNetworks to get "
                "valid network IDs."
            ),
            params=TokenDetailsParams,
            build_request=_token_details_request,
        ),
        Operation(
            name="getTokenPools",
            description=(
                "Get liquidity pools containing a specific token on a network. Great for finding where a "
                "token is traded."
            ),
            params=TokenPoolsParams,
            build_request=_token_pools_request,
        ),
        Operation(
            name="getPoolOHLCV",
            description=(
                "Get historical price data (OHLCV) for a pool - essential for price analysis, backtesting, "
                "and visualization. Requires network and pool address."
            ),
            params=PoolOHLCVParams,
            build_request=_pool_ohlcv_request,
        ),
        Operation(
            name="getPoolTransactions",
            description=(
                "Get recent transactions for a specific pool. Shows swaps, adds, removes. Requires network "
                "and pool address."
            ),
            params=PoolTransactionsParams,
            build_request=_pool_transactions_request,
        ),
        Operation(
            name="search",
            description=(
                "Search across ALL networks for tokens, pools, and DEXes by name, symbol, or address. Good "
                "starting point when you don't know the specific network."
            ),
            params=SearchParams,
            build_request=_search_request,
        ),
        Operation(
            name="getStats",
            description=(
                "Get high-level statistics about the DexPaprika ecosystem: total networks, DEXes, pools, "
                "and tokens available."
            ),
            params=NoParams,
            build_request=_stats_request,
        ),
    ])


# --- Dispatch ---


def format_response(data: Any) -> str:
    """Serializes the API payload as-is; FastMCP wraps the string in a single text content item."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


class Dispatcher:
    """Validates an invocation, performs its single API call and formats the result."""

    def __init__(self, registry: OperationRegistry, gateway: ApiGateway):
        self.registry = registry
        self.gateway = gateway

    def prepare(self, name: str, arguments: Optional[Mapping] = None) -> RequestLine:
        """Returns the (path, query) an invocation would send, without sending it."""
        operation = self.registry.get(name)
        if operation is None:
            error = ValidationError(f"Unknown operation: {name}")
            logger.error(str(error))
            raise error
        try:
            params = operation.validate(arguments)
        except ValidationError as e:
            logger.error(str(e))
            raise
        return operation.build_request(params)

    async def invoke(self, name: str, arguments: Optional[Mapping] = None) -> str:
        path, query = self.prepare(name, arguments)
        logger.info(f"{name}: GET {path}")
        data = await self.gateway.fetch_resource(path, query)
        return format_response(data)
