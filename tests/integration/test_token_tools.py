import json
import types
from unittest.mock import MagicMock # For mock context type hint

import pytest

from mcp_dexpaprika.errors import RequestFailedError, ValidationError

# Mark all tests in this module as asyncio
pytestmark = pytest.mark.asyncio

USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"

# --- Test Cases for token tools ---

async def test_get_token_details(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module
    fake_api.body = {"id": USDC, "symbol": "USDC", "decimals": 6, "summary": {"price_usd": 1.0}}

    result = await server.get_token_details(context=mock_context, network="ethereum", tokenAddress=USDC)

    assert json.loads(result) == fake_api.body
    assert fake_api.last_target == f"/networks/ethereum/tokens/{USDC}"


async def test_get_token_details_strips_identifiers(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module

    await server.get_token_details(context=mock_context, network=" ethereum ", tokenAddress=f" {USDC}\n")

    assert fake_api.last_target == f"/networks/ethereum/tokens/{USDC}"


async def test_get_token_details_unknown_token(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module
    fake_api.status_code = 404

    with pytest.raises(RequestFailedError) as excinfo:
        await server.get_token_details(context=mock_context, network="ethereum", tokenAddress="0xdead")

    assert excinfo.value.status_code == 404


async def test_get_token_pools_defaults(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module

    await server.get_token_pools(context=mock_context, network="ethereum", tokenAddress=USDC)

    assert fake_api.last_target == (
        f"/networks/ethereum/tokens/{USDC}/pools?page=0&limit=10&sort=desc&order_by=volume_usd"
    )


async def test_get_token_pools_with_reorder_and_filter(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module
    fake_api.body = {"pools": [{"id": "0x88e6", "tokens": [{"id": USDC}, {"id": WETH}]}]}

    result = await server.get_token_pools(
        context=mock_context,
        network="ethereum",
        tokenAddress=USDC,
        orderBy="transactions",
        reorder=True,
        address=WETH,
    )

    assert json.loads(result) == fake_api.body
    assert fake_api.last_target == (
        f"/networks/ethereum/tokens/{USDC}/pools"
        f"?page=0&limit=10&sort=desc&order_by=transactions&reorder=true&address={WETH}"
    )


async def test_get_token_pools_reorder_false_is_sent(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module

    await server.get_token_pools(context=mock_context, network="ethereum", tokenAddress=USDC, reorder=False)

    assert fake_api.last_target.endswith("&reorder=false")


async def test_get_token_pools_encodes_filter_address(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module

    await server.get_token_pools(
        context=mock_context, network="ethereum", tokenAddress="token/1?x", address="a&b=c"
    )

    request = fake_api.requests[-1]
    assert request.url.raw_path.startswith(b"/networks/ethereum/tokens/token%2F1%3Fx/pools?")
    assert request.url.params["address"] == "a&b=c"
    assert fake_api.last_target.endswith("&address=a%26b%3Dc")


async def test_get_token_pools_rejects_unknown_order_by(
    patched_server_module: types.ModuleType,
    mock_context: MagicMock,
    fake_api,
):
    server = patched_server_module

    with pytest.raises(ValidationError, match="orderBy"):
        await server.get_token_pools(context=mock_context, network="ethereum", tokenAddress=USDC, orderBy="fdv")

    assert fake_api.requests == []
