"""
Live endpoint check.

Runs one representative invocation per operation against the public DexPaprika
API and prints the shape of each answer. Meant for operators checking that the
upstream API still matches what the tools expect; the test suite never calls it
against the network.
"""

import asyncio
import json
import sys
from typing import Any, Dict, List, Optional, Tuple

from mcp.server.fastmcp.utilities.logging import get_logger

from mcp_dexpaprika.errors import DexPaprikaError
from mcp_dexpaprika.gateway import ApiGateway
from mcp_dexpaprika.operations import Dispatcher, build_registry

logger = get_logger(__name__)

UNISWAP_V3_USDC_WETH_POOL = "0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640"
USDC_TOKEN = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"

SAMPLE_INVOCATIONS: List[Tuple[str, Dict[str, Any]]] = [
    ("getNetworks", {}),
    ("getNetworkDexes", {"network": "ethereum"}),
    ("getNetworkPools", {"network": "ethereum"}),
    ("getDexPools", {"network": "ethereum", "dex": "uniswap_v3"}),
    ("getPoolDetails", {"network": "ethereum", "poolAddress": UNISWAP_V3_USDC_WETH_POOL}),
    ("getTokenDetails", {"network": "ethereum", "tokenAddress": USDC_TOKEN}),
    ("getTokenPools", {"network": "ethereum", "tokenAddress": USDC_TOKEN}),
    ("getPoolOHLCV", {"network": "ethereum", "poolAddress": UNISWAP_V3_USDC_WETH_POOL, "start": "2024-01-01"}),
    ("getPoolTransactions", {"network": "ethereum", "poolAddress": UNISWAP_V3_USDC_WETH_POOL}),
    ("search", {"query": "ethereum"}),
    ("getStats", {}),
]


def describe_payload(payload: Any) -> str:
    if isinstance(payload, dict):
        return f"object with keys {sorted(payload)}"
    if isinstance(payload, list):
        return f"array of {len(payload)} items"
    return type(payload).__name__


async def run_smoke_checks(dispatcher: Optional[Dispatcher] = None) -> Dict[str, bool]:
    """Returns {operation name: succeeded}. Failures are reported, not raised."""
    dispatcher = dispatcher or Dispatcher(build_registry(), ApiGateway())
    results: Dict[str, bool] = {}
    for name, arguments in SAMPLE_INVOCATIONS:
        print(f"\n-------- Testing {name} --------")
        try:
            payload = json.loads(await dispatcher.invoke(name, arguments))
        except DexPaprikaError as e:
            print(f"{name} test: FAILED ({e})")
            results[name] = False
            continue
        print(f"Response: {describe_payload(payload)}")
        print(f"{name} test: SUCCESS")
        results[name] = True
    return results


def main():
    print("Starting DexPaprika API endpoint checks...")
    results = asyncio.run(run_smoke_checks())
    failed = [name for name, ok in results.items() if not ok]
    print(f"\n{len(results) - len(failed)}/{len(results)} endpoints OK")
    if failed:
        logger.error(f"Failing endpoints: {', '.join(failed)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
