"""Liveness endpoint."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db": True}


@pytest.mark.asyncio
async def test_health_needs_no_token(async_client: AsyncClient):
    resp = await async_client.get("/api/health", headers={"Authorization": "Bearer nonsense"})
    assert resp.status_code == 200
