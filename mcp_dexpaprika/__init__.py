"""
MCP DexPaprika Package

This package exposes the DexPaprika market-data API (networks, DEXes, liquidity
pools, tokens, OHLCV, transactions, search and ecosystem stats) as a set of MCP
(Model Context Protocol) tools, so an AI assistant can query decentralized
exchange data through structured tool calls instead of raw HTTP.

Main components:
- server.py: FastMCP server and tool definitions
- operations.py: Operation registry, parameter models and the dispatcher
- gateway.py: HTTP access to the DexPaprika REST API
- errors.py: Error taxonomy surfaced to the MCP host
- config.py: Environment-driven operational settings
- smoke.py: Live endpoint check against the public API
"""

__version__ = "1.1.0"
