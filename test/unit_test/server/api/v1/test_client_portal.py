"""
Tests for the client portal and billing endpoints.
"""

import pytest
from httpx import AsyncClient

from legal_aid.core.models.domain.enums import CaseCategory

pytestmark = pytest.mark.asyncio


async def test_client_registers_and_tracks_case(client: AsyncClient, factory, login):
    office = await factory.office()
    await factory.coordinator(office)
    lawyer = await factory.lawyer(office, specializations=[CaseCategory.LABOR])
    client_user = await factory.client(office)
    headers = await login(client_user)

    response = await client.post(
        "/api/v1/client/cases", json={"title": "Unpaid wages", "category": "LABOR"}, headers=headers
    )
    assert response.status_code == 201
    case = response.json()["data"]
    assert case["status"] == "PENDING"
    assert case["lawyer_id"] == lawyer.id

    response = await client.get("/api/v1/client/cases", headers=headers)
    assert response.json()["data"]["total"] == 1

    response = await client.get("/api/v1/client/stats", headers=headers)
    stats = response.json()["data"]
    assert stats["total_cases"] == 1
    assert stats["cases_by_status"] == {"PENDING": 1}


async def test_client_cannot_see_other_clients_case(client: AsyncClient, factory, login):
    office = await factory.office()
    owner = await factory.client(office)
    other = await factory.client(office)
    case = await factory.case(office, client=owner)
    headers = await login(other)

    response = await client.get(f"/api/v1/client/cases/{case.id}", headers=headers)

    assert response.status_code == 404


async def test_client_updates_profile(client: AsyncClient, factory, login):
    client_user = await factory.client(await factory.office())
    headers = await login(client_user)

    response = await client.put(
        "/api/v1/client/profile", json={"full_name": "Sara T.", "wereda": "Kirkos"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["wereda"] == "Kirkos"

    response = await client.get("/api/v1/client/profile", headers=headers)
    assert response.json()["data"]["user"]["full_name"] == "Sara T."


async def test_service_request_with_package(client: AsyncClient, factory, login):
    admin_headers = await login(await factory.admin())
    response = await client.post(
        "/api/v1/billing/packages", json={"name": "Court representation", "price": 1500}, headers=admin_headers
    )
    assert response.status_code == 201
    package_id = response.json()["data"]["id"]

    client_headers = await login(await factory.client(await factory.office()))
    response = await client.post(
        "/api/v1/billing/requests",
        json={"title": "Represent me", "package_id": package_id},
        headers=client_headers,
    )
    assert response.status_code == 201
    request = response.json()["data"]
    assert request["quoted_price"] == 1500
    assert request["payment_status"] == "PENDING"

    response = await client.patch(
        f"/api/v1/billing/requests/{request['id']}/payment-status",
        json={"payment_status": "COMPLETED"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["payment_status"] == "COMPLETED"

    response = await client.get("/api/v1/billing/requests/mine", headers=client_headers)
    assert [r["payment_status"] for r in response.json()["data"]] == ["COMPLETED"]


async def test_only_admins_create_packages(client: AsyncClient, factory, login):
    headers = await login(await factory.client(await factory.office()))

    response = await client.post("/api/v1/billing/packages", json={"name": "X", "price": 1}, headers=headers)

    assert response.status_code == 403
