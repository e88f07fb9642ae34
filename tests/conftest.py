"""Shared test fixtures for crud-e2e tests.

This module provides fixtures for driving the runner without a network:
- mock_crud_state / mock_crud_service: In-process FastAPI mock of the API
- crud_client: CrudClient wired to the mock through httpx.ASGITransport
"""

from collections.abc import AsyncGenerator

import httpx
import pytest

from crud_e2e.client import CrudClient
from tests.mocks import MockCrudService, MockCrudState

TEST_BASE_URL = "http://test"


@pytest.fixture
def mock_crud_state() -> MockCrudState:
    """Fixture providing mock service state for configuration."""
    return MockCrudState()


@pytest.fixture
def mock_crud_service(mock_crud_state: MockCrudState) -> MockCrudService:
    """Fixture providing a MockCrudService instance."""
    return MockCrudService(mock_crud_state)


@pytest.fixture
def asgi_transport(mock_crud_service: MockCrudService) -> httpx.ASGITransport:
    """Fixture providing an ASGI transport to the mock service."""
    return httpx.ASGITransport(app=mock_crud_service.app)


@pytest.fixture
async def crud_client(asgi_transport: httpx.ASGITransport) -> AsyncGenerator[CrudClient, None]:
    """Fixture providing an entered CrudClient connected to the mock service.

    Uses ASGI transport for in-process testing (no real network).
    """
    async with CrudClient(TEST_BASE_URL, transport=asgi_transport) as client:
        yield client


@pytest.fixture
async def guest_token(crud_client: CrudClient) -> str:
    """Fixture providing a bearer token for a freshly created guest."""
    response = await crud_client.create_guest_user()
    return response.headers["authorization"].removeprefix("Bearer ")
