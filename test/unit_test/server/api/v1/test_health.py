"""
Tests for health and version endpoints.
"""

import pytest
from httpx import AsyncClient

from legal_aid.server.core import constant

pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client: AsyncClient):
    response = await client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": constant.VERSION, "schema_version": "v1"}


async def test_responses_carry_request_id(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"
    assert float(response.headers["X-Process-Time"]) >= 0
