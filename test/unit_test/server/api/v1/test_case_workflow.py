"""
End-to-end case workflow through the HTTP API.

Tests cover:
- Public intake registration routed to the office coordinator
- Coordinator triage and lawyer assignment
- Lawyer acceptance and resolution
- Role guards on every portal
"""

import pytest
from httpx import AsyncClient

from legal_aid.core.models.domain.enums import CaseCategory

pytestmark = pytest.mark.asyncio


def registration(office_id: int, **overrides) -> dict:
    payload = {
        "full_name": "Abebe Kebede",
        "email": "abebe@example.org",
        "phone": "0911223344",
        "password": "Password123!",
        "region": "Addis Ababa",
        "wereda": "Bole",
        "kebele": "Kebele 01",
        "office_id": office_id,
        "case_title": "Land dispute",
        "category": "PROPERTY",
    }
    payload.update(overrides)
    return payload


async def test_register_creates_pending_case(client: AsyncClient, factory):
    office = await factory.office()
    coordinator = await factory.coordinator(office)

    response = await client.post("/api/v1/intake/register", json=registration(office.id))

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["case"]["status"] == "PENDING"
    assert data["user"]["role"] == "CLIENT"
    assert data["coordinator_id"] == coordinator.id


async def test_register_twice_is_rejected(client: AsyncClient, factory):
    office = await factory.office()
    assert (await client.post("/api/v1/intake/register", json=registration(office.id))).status_code == 201

    response = await client.post("/api/v1/intake/register", json=registration(office.id, phone="0911999999"))

    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_register_validation_errors(client: AsyncClient, factory):
    office = await factory.office()

    response = await client.post("/api/v1/intake/register", json=registration(office.id, email="not-an-email"))

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "email"


async def test_public_office_list(client: AsyncClient, factory):
    await factory.office(name="Bole Office")

    response = await client.get("/api/v1/intake/offices")

    assert response.status_code == 200
    assert [office["name"] for office in response.json()["data"]] == ["Bole Office"]


async def test_full_case_lifecycle(client: AsyncClient, factory, login):
    office = await factory.office()
    coordinator = await factory.coordinator(office)
    lawyer = await factory.lawyer(office, specializations=[CaseCategory.FAMILY])
    response = await client.post("/api/v1/intake/register", json=registration(office.id))
    case_id = response.json()["data"]["case"]["id"]
    client_headers = await login(await factory.repos.users.get_by_email("abebe@example.org"))
    coordinator_headers = await login(coordinator)
    lawyer_headers = await login(lawyer)

    response = await client.get("/api/v1/coordinator/cases", headers=coordinator_headers)
    assert response.json()["data"]["total"] == 1

    response = await client.post(
        f"/api/v1/coordinator/cases/{case_id}/assign-lawyer", json={"lawyer_id": lawyer.id}, headers=coordinator_headers
    )
    assert response.status_code == 200
    assignment_id = response.json()["data"]["id"]

    response = await client.post(
        f"/api/v1/lawyer/assignments/{assignment_id}/respond", json={"accept": True}, headers=lawyer_headers
    )
    assert response.status_code == 200

    response = await client.get(f"/api/v1/client/cases/{case_id}", headers=client_headers)
    assert response.json()["data"]["case"]["status"] == "ACTIVE"

    response = await client.patch(
        f"/api/v1/lawyer/cases/{case_id}/status", json={"status": "RESOLVED"}, headers=lawyer_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "RESOLVED"

    response = await client.patch(
        f"/api/v1/coordinator/cases/{case_id}/status", json={"status": "ACTIVE"}, headers=coordinator_headers
    )
    assert response.status_code == 400
    assert "Invalid case status transition" in response.json()["message"]


async def test_reject_requires_reason(client: AsyncClient, factory, login):
    office = await factory.office()
    coordinator = await factory.coordinator(office)
    case = await factory.case(office)
    headers = await login(coordinator)

    response = await client.post(f"/api/v1/coordinator/cases/{case.id}/reject", json={}, headers=headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Rejection reason is required"


async def test_portals_are_role_guarded(client: AsyncClient, factory, login):
    office = await factory.office()
    client_user = await factory.client(office)
    headers = await login(client_user)

    for path in ("/api/v1/coordinator/cases", "/api/v1/lawyer/cases", "/api/v1/admin/users", "/api/v1/roles/"):
        response = await client.get(path, headers=headers)
        assert response.status_code == 403, path
        assert response.json() == {"success": False, "message": "Insufficient permissions"}
