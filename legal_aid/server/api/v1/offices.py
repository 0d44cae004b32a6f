"""
Office Endpoints.
"""

from typing import List

from fastapi import APIRouter, status

from legal_aid.core.models.io import ApiResponse, ok
from legal_aid.core.models.io.offices import OfficeCreate, OfficeRead, OfficeUpdate
from legal_aid.server.services.deps import AdminDep, CurrentUserDep, OfficeServiceDep

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[OfficeRead]], summary="List Offices")
async def list_offices(user: CurrentUserDep, offices: OfficeServiceDep):
    return ok([OfficeRead.model_validate(office) for office in await offices.list_offices()])


@router.get("/{office_id}", response_model=ApiResponse[OfficeRead], summary="Get Office")
async def get_office(office_id: int, user: CurrentUserDep, offices: OfficeServiceDep):
    return ok(OfficeRead.model_validate(await offices.get_office(office_id)))


@router.post(
    "/",
    response_model=ApiResponse[OfficeRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Office",
    responses={400: {"description": "Office name already exists"}},
)
async def create_office(payload: OfficeCreate, admin: AdminDep, offices: OfficeServiceDep):
    office = await offices.create_office(payload)
    return ok(OfficeRead.model_validate(office), "Office created successfully")


@router.put("/{office_id}", response_model=ApiResponse[OfficeRead], summary="Update Office")
async def update_office(office_id: int, payload: OfficeUpdate, admin: AdminDep, offices: OfficeServiceDep):
    office = await offices.update_office(office_id, payload)
    return ok(OfficeRead.model_validate(office), "Office updated successfully")


@router.delete(
    "/{office_id}",
    response_model=ApiResponse[None],
    summary="Delete Office",
    responses={400: {"description": "Office still has cases or staff"}},
)
async def delete_office(office_id: int, admin: AdminDep, offices: OfficeServiceDep):
    await offices.delete_office(office_id)
    return ok(message="Office deleted successfully")
