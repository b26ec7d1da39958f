"""
Test Package for MCP DexPaprika

This package contains the test suite for the MCP DexPaprika server. The tests
exercise the operation registry, the API gateway and every MCP tool against a
mocked DexPaprika API, so they run offline.

Test Structure:
- integration/: Tests for the tools, the gateway and the registry
- integration/conftest.py: Pytest fixtures (fake API transport, patched server)
"""

# Test package for mcp-dexpaprika
