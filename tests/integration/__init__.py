"""
Integration Tests for MCP DexPaprika

These tests drive the real server module, registry and gateway. Only the HTTP
layer is replaced, by an httpx.MockTransport that records every outbound request
and answers with a canned status and body.

Test files:
- conftest.py: Pytest fixtures and the fake API
- test_gateway.py: URL encoding and HTTP status classification
- test_operations.py: Registry contents, validation and request building
- test_pool_tools.py: Network, DEX and pool tools
- test_token_tools.py: Token tools
- test_server.py: Search, stats, tool registration and the MCP envelope
- test_smoke.py: The live endpoint check, run against the fake API
- test_config.py: Environment-driven settings
"""

# Integration tests for mcp-dexpaprika
