from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.utilities.logging import get_logger

from mcp_dexpaprika.config import API_BASE_URL, LOG_LEVEL, SERVER_NAME
from mcp_dexpaprika.gateway import ApiGateway
from mcp_dexpaprika.operations import (
    DEFAULT_INTERVAL,
    DEFAULT_LIMIT,
    DEFAULT_OHLCV_LIMIT,
    DEFAULT_ORDER_BY,
    DEFAULT_PAGE,
    DEFAULT_SORT,
    Cursor,
    DexId,
    Dispatcher,
    EndTime,
    FilterAddress,
    Interval,
    Inversed,
    NetworkId,
    OhlcvLimit,
    OrderBy,
    Page,
    PageLimit,
    PoolAddress,
    Reorder,
    SearchQuery,
    SortOrder,
    StartTime,
    TokenAddress,
    build_registry,
)

logger = get_logger(__name__)

INSTRUCTIONS = """\
WORKFLOW FOR GETTING POOL DATA:
1. ALWAYS call getNetworks first to see available networks.
2. Use getNetworkPools to get pools on a specific network (there is NO global pools function).
3. For cross-network searches, use search.

THERE IS NO "getTopPools" or "getAllPools" function - always use network-specific queries.
"""

# --- Server Setup ---
registry = build_registry()
dispatcher = Dispatcher(registry, ApiGateway())

mcp = FastMCP(name=SERVER_NAME, instructions=INSTRUCTIONS, log_level=LOG_LEVEL)


def _describe(name: str) -> str:
    return registry[name].description


# --- MCP Tools ---

@mcp.tool(name="getNetworks", description=_describe("getNetworks"))
async def get_networks(context: Context) -> str:
    return await dispatcher.invoke("getNetworks")


@mcp.tool(name="getNetworkDexes", description=_describe("getNetworkDexes"))
async def get_network_dexes(
    context: Context,
    network: NetworkId,
    page: Page = DEFAULT_PAGE,
    limit: PageLimit = DEFAULT_LIMIT,
) -> str:
    return await dispatcher.invoke("getNetworkDexes", {"network": network, "page": page, "limit": limit})


@mcp.tool(name="getNetworkPools", description=_describe("getNetworkPools"))
async def get_network_pools(
    context: Context,
    network: NetworkId,
    page: Page = DEFAULT_PAGE,
    limit: PageLimit = DEFAULT_LIMIT,
    sort: SortOrder = DEFAULT_SORT,
    orderBy: OrderBy = DEFAULT_ORDER_BY,
) -> str:
    return await dispatcher.invoke(
        "getNetworkPools",
        {"network": network, "page": page, "limit": limit, "sort": sort, "orderBy": orderBy},
    )


@mcp.tool(name="getDexPools", description=_describe("getDexPools"))
async def get_dex_pools(
    context: Context,
    network: NetworkId,
    dex: DexId,
    page: Page = DEFAULT_PAGE,
    limit: PageLimit = DEFAULT_LIMIT,
    sort: SortOrder = DEFAULT_SORT,
    orderBy: OrderBy = DEFAULT_ORDER_BY,
) -> str:
    return await dispatcher.invoke(
        "getDexPools",
        {"network": network, "dex": dex, "page": page, "limit": limit, "sort": sort, "orderBy": orderBy},
    )


@mcp.tool(name="getPoolDetails", description=_describe("getPoolDetails"))
async def get_pool_details(
    context: Context,
    network: NetworkId,
    poolAddress: PoolAddress,
    inversed: Inversed = False,
) -> str:
    return await dispatcher.invoke(
        "getPoolDetails", {"network": network, "poolAddress": poolAddress, "inversed": inversed}
    )


@mcp.tool(name="getTokenDetails", description=_describe("getTokenDetails"))
async def get_token_details(
    context: Context,
    network: NetworkId,
    tokenAddress: TokenAddress,
) -> str:
    return await dispatcher.invoke("getTokenDetails", {"network": network, "tokenAddress": tokenAddress})


@mcp.tool(name="getTokenPools", description=_describe("getTokenPools"))
async def get_token_pools(
    context: Context,
    network: NetworkId,
    tokenAddress: TokenAddress,
    page: Page = DEFAULT_PAGE,
    limit: PageLimit = DEFAULT_LIMIT,
    sort: SortOrder = DEFAULT_SORT,
    orderBy: OrderBy = DEFAULT_ORDER_BY,
    reorder: Reorder = None,
    address: FilterAddress = None,
) -> str:
    return await dispatcher.invoke(
        "getTokenPools",
        {
            "network": network,
            "tokenAddress": tokenAddress,
            "page": page,
            "limit": limit,
            "sort": sort,
            "orderBy": orderBy,
            "reorder": reorder,
            "address": address,
        },
    )


@mcp.tool(name="getPoolOHLCV", description=_describe("getPoolOHLCV"))
async def get_pool_ohlcv(
    context: Context,
    network: NetworkId,
    poolAddress: PoolAddress,
    start: StartTime,
    end: EndTime = None,
    limit: OhlcvLimit = DEFAULT_OHLCV_LIMIT,
    interval: Interval = DEFAULT_INTERVAL,
    inversed: Inversed = False,
) -> str:
    return await dispatcher.invoke(
        "getPoolOHLCV",
        {
            "network": network,
            "poolAddress": poolAddress,
            "start": start,
            "end": end,
            "limit": limit,
            "interval": interval,
            "inversed": inversed,
        },
    )


@mcp.tool(name="getPoolTransactions", description=_describe("getPoolTransactions"))
async def get_pool_transactions(
    context: Context,
    network: NetworkId,
    poolAddress: PoolAddress,
    page: Page = DEFAULT_PAGE,
    limit: PageLimit = DEFAULT_LIMIT,
    cursor: Cursor = None,
) -> str:
    return await dispatcher.invoke(
        "getPoolTransactions",
        {"network": network, "poolAddress": poolAddress, "page": page, "limit": limit, "cursor": cursor},
    )


@mcp.tool(name="search", description=_describe("search"))
async def search(context: Context, query: SearchQuery) -> str:
    return await dispatcher.invoke("search", {"query": query})


@mcp.tool(name="getStats", description=_describe("getStats"))
async def get_stats(context: Context) -> str:
    return await dispatcher.invoke("getStats")


def main():
    logger.info(f"Starting {SERVER_NAME} over stdio ({len(registry)} tools, API {API_BASE_URL})")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    # Example: python -m mcp_dexpaprika.server
    main()
