import sys
import types
from pathlib import Path
from typing import Any, Generator, List, Optional
from unittest.mock import MagicMock # For mocking Context

import httpx
import pytest
from pytest import MonkeyPatch

# Ensure the server module can be imported
ROOT_DIR = Path(__file__).parent.parent.parent
sys.path.insert(0, str(ROOT_DIR))

import mcp_dexpaprika.server as server_module
from mcp_dexpaprika.gateway import ApiGateway
from mcp_dexpaprika.operations import Dispatcher, build_registry


class FakeDexPaprikaApi:
    """Answers every request with a canned response and records what was sent."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"ok": True}
        self.raw_body: Optional[bytes] = None
        self.error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_target(self) -> str:
        """Path and query of the last request exactly as sent on the wire."""
        assert self.requests, "no request was sent"
        return self.requests[-1].url.raw_path.decode("ascii")


# --- Fake API Fixtures ---

@pytest.fixture(scope="function")
def fake_api() -> FakeDexPaprikaApi:
    return FakeDexPaprikaApi()


@pytest.fixture(scope="function")
def gateway(fake_api: FakeDexPaprikaApi) -> ApiGateway:
    return ApiGateway(transport=fake_api.transport)


@pytest.fixture(scope="function")
def dispatcher(gateway: ApiGateway) -> Dispatcher:
    return Dispatcher(build_registry(), gateway)


# --- Mock Context Fixture ---
@pytest.fixture(scope="function")
def mock_context() -> MagicMock:
    """Provides a mock MCP Context object."""
    return MagicMock()


# --- Patched Server Module Fixture ---
@pytest.fixture(scope="function")
def patched_server_module(
    monkeypatch: MonkeyPatch, dispatcher: Dispatcher
) -> Generator[types.ModuleType, None, None]:
    """Provides the server module with its dispatcher routed to the fake API."""
    monkeypatch.setattr(server_module, "dispatcher", dispatcher)
    yield server_module
