from typing import AsyncGenerator, Dict, Optional
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from legal_aid.core.database.entities.users import User


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with mocked lifespan and overridden dependencies."""
    from legal_aid.core.database import get_session
    from legal_aid.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    # Mock the lifespan to prevent database initialization during tests
    async def mock_lifespan(app):
        yield

    with patch("legal_aid.server.main.lifespan", mock_lifespan):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
            yield client

    app.dependency_overrides.clear()


@pytest.fixture
def login(client: AsyncClient, factory):
    """Log a user in through the API and return the Authorization header."""

    async def _login(user: User, password: Optional[str] = None) -> Dict[str, str]:
        credentials = {"email": user.email, "password": password or factory.password}
        response = await client.post("/api/v1/auth/login", json=credentials)
        assert response.status_code == 200, response.text
        # Requests authenticate with the returned header only
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    return _login
