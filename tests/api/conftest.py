"""Shared fixtures for API tests."""
from typing import Any

import pytest
from httpx import AsyncClient


async def create_user(client: AsyncClient, name: str) -> dict[str, Any]:
    """Register a user through the API and return the response body."""
    response = await client.post("/api/usuarios", json={"nome": name, "senha": f"{name}-senha"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def alice(client: AsyncClient) -> dict[str, Any]:
    """User who writes letters."""
    return await create_user(client, "alice")


@pytest.fixture
async def bob(client: AsyncClient) -> dict[str, Any]:
    """User who draws letters and replies."""
    return await create_user(client, "bob")


# Constant for non-existent entity ID
FAKE_UUID = "00000000-0000-0000-0000-000000000000"
