"""
Tests for coordinator client registration and lookup, and lawyer appeal edits.
"""

import pytest
from httpx import AsyncClient

from legal_aid.core.models.domain.enums import CaseStatus

pytestmark = pytest.mark.asyncio


async def test_coordinator_registers_and_finds_client(client: AsyncClient, factory, login):
    office = await factory.office()
    headers = await login(await factory.coordinator(office))

    response = await client.post(
        "/api/v1/coordinator/clients",
        json={
            "full_name": "Tigist Haile",
            "phone": "0922334455",
            "region": "Amhara",
            "wereda": "Bahir Dar",
            "kebele": "Kebele 11",
        },
        headers=headers,
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["user"]["role"] == "CLIENT"
    assert data["profile"]["office_id"] == office.id
    assert data["temporary_password"]

    login_response = await client.post(
        "/api/v1/auth/login", json={"email": data["user"]["email"], "password": data["temporary_password"]}
    )
    assert login_response.status_code == 200
    client.cookies.clear()

    response = await client.get(
        "/api/v1/coordinator/clients/search", params={"query": "0922", "type": "phone"}, headers=headers
    )

    assert response.status_code == 200
    assert [found["user"]["id"] for found in response.json()["data"]] == [data["user"]["id"]]


async def test_client_search_requires_query(client: AsyncClient, factory, login):
    headers = await login(await factory.coordinator(await factory.office()))

    response = await client.get("/api/v1/coordinator/clients/search", headers=headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


async def test_lawyer_cannot_approve_own_appeal(client: AsyncClient, factory, login):
    office = await factory.office()
    lawyer = await factory.lawyer(office)
    case = await factory.case(office, client=await factory.client(office), status=CaseStatus.ACTIVE, lawyer_id=lawyer.id)
    headers = await login(lawyer)
    appeal = (
        await client.post("/api/v1/lawyer/appeals", json={"case_id": case.id, "title": "Appeal"}, headers=headers)
    ).json()["data"]

    response = await client.put(f"/api/v1/lawyer/appeals/{appeal['id']}", json={"status": "APPROVED"}, headers=headers)

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Lawyers can only withdraw an appeal"}


async def test_lawyer_deletes_appeal(client: AsyncClient, factory, login):
    office = await factory.office()
    lawyer = await factory.lawyer(office)
    case = await factory.case(office, client=await factory.client(office), status=CaseStatus.ACTIVE, lawyer_id=lawyer.id)
    headers = await login(lawyer)
    appeal = (
        await client.post(
            "/api/v1/lawyer/appeals",
            json={"case_id": case.id, "title": "Appeal", "hearing_date": "2031-01-05T09:00:00"},
            headers=headers,
        )
    ).json()["data"]

    response = await client.delete(f"/api/v1/lawyer/appeals/{appeal['id']}", headers=headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Appeal deleted successfully"
    listing = await client.get("/api/v1/lawyer/appeals", headers=headers)
    assert listing.json()["data"]["total"] == 0
