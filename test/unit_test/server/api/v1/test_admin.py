"""
Tests for admin-only endpoints: staff accounts, custom roles and reports.
"""

from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio
from httpx import AsyncClient

from legal_aid.core.database.repositories.offices import OfficeRepository
from legal_aid.server.services.access import AccessService

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def admin_headers(factory, login):
    await AccessService(factory.repos).seed_defaults()
    return await login(await factory.admin())


async def test_create_and_list_staff(client: AsyncClient, factory, admin_headers):
    office = await factory.office()

    response = await client.post(
        "/api/v1/admin/users",
        json={
            "email": "new.lawyer@example.org",
            "full_name": "New Lawyer",
            "password": "Password123!",
            "role": "LAWYER",
            "office_id": office.id,
            "specializations": ["LABOR"],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    user_id = response.json()["data"]["id"]

    response = await client.get("/api/v1/admin/users", params={"role": "LAWYER"}, headers=admin_headers)
    page = response.json()["data"]
    assert page["total"] == 1
    assert page["items"][0]["id"] == user_id

    response = await client.get(f"/api/v1/admin/users/{user_id}", headers=admin_headers)
    assert response.json()["data"]["lawyer_profile"]["specializations"] == ["LABOR"]


async def test_staff_without_office_is_rejected(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/admin/users",
        json={"email": "c@example.org", "full_name": "C", "password": "Password123!", "role": "COORDINATOR"},
        headers=admin_headers,
    )

    assert response.status_code == 400


async def test_suspended_user_loses_access(client: AsyncClient, factory, login, admin_headers):
    lawyer = await factory.lawyer(await factory.office())
    lawyer_headers = await login(lawyer)

    response = await client.patch(
        f"/api/v1/admin/users/{lawyer.id}/status", json={"status": "SUSPENDED"}, headers=admin_headers
    )
    assert response.status_code == 200

    response = await client.get("/api/v1/auth/me", headers=lawyer_headers)
    assert response.status_code == 401


async def test_custom_role_lifecycle(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/roles/",
        json={"name": "Paralegal", "permissions": ["CASES_VIEW", "DOCUMENTS_VIEW"]},
        headers=admin_headers,
    )
    assert response.status_code == 201
    role = response.json()["data"]
    assert role["permissions"] == ["CASES_VIEW", "DOCUMENTS_VIEW"]
    assert role["is_system_role"] is False

    response = await client.put(
        f"/api/v1/roles/{role['id']}", json={"permissions": ["REPORTS_VIEW"]}, headers=admin_headers
    )
    assert response.json()["data"]["permissions"] == ["REPORTS_VIEW"]

    response = await client.delete(f"/api/v1/roles/{role['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/v1/roles/{role['id']}", headers=admin_headers)
    assert response.status_code == 404


async def test_unknown_permission_is_reported(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/roles/", json={"name": "Broken", "permissions": ["LAUNCH_ROCKETS"]}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["errors"] == ["LAUNCH_ROCKETS"]


async def test_system_roles_are_read_only(client: AsyncClient, admin_headers):
    roles = (await client.get("/api/v1/roles/", headers=admin_headers)).json()["data"]
    system_role = next(role for role in roles if role["is_system_role"])

    response = await client.delete(f"/api/v1/roles/{system_role['id']}", headers=admin_headers)

    assert response.status_code == 403


async def test_dashboard_report(client: AsyncClient, factory, admin_headers):
    office = await factory.office()
    await factory.case(office)

    response = await client.get("/api/v1/reports/dashboard", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["cases"]["total"] == 1
    assert data["success_rate"] == 0.0


async def test_duplicate_office_missed_by_name_check_is_409(client: AsyncClient, factory, admin_headers):
    await factory.office("Bahir Dar Branch")

    with patch.object(OfficeRepository, "get_by_name", new=AsyncMock(return_value=None)):
        response = await client.post(
            "/api/v1/offices/", json={"name": "Bahir Dar Branch", "location": "Bahir Dar"}, headers=admin_headers
        )

    assert response.status_code == 409
    assert response.json() == {"success": False, "message": "Resource already exists"}
