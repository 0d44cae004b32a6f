"""
Kebele Endpoints.

Admins manage kebeles and their managers; a kebele manager reads the cases
of the kebele they are linked to.
"""

from typing import Annotated, List

from fastapi import APIRouter, Query, status

from legal_aid.core.models.io import ApiResponse, Page, ok
from legal_aid.core.models.io.cases import CaseRead
from legal_aid.core.models.io.offices import KebeleCreate, KebeleDashboard, KebeleRead, KebeleUpdate
from legal_aid.server.services.cases import page_offset
from legal_aid.server.services.deps import AdminDep, KebeleManagerDep, OfficeServiceDep

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[KebeleRead]], summary="List Kebeles")
async def list_kebeles(admin: AdminDep, offices: OfficeServiceDep):
    return ok(await offices.list_kebeles())


@router.get(
    "/mine/dashboard",
    response_model=ApiResponse[KebeleDashboard],
    summary="Kebele Manager Dashboard",
    responses={403: {"description": "No kebele is linked to this account"}},
)
async def my_dashboard(manager: KebeleManagerDep, offices: OfficeServiceDep):
    return ok(await offices.manager_dashboard(manager))


@router.get("/mine/cases", response_model=ApiResponse[Page[CaseRead]], summary="Kebele Cases")
async def my_cases(
    manager: KebeleManagerDep,
    offices: OfficeServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    items, total = await offices.kebele_cases(manager, limit=limit, offset=page_offset(page, limit))
    return ok(Page.build([CaseRead.model_validate(case) for case in items], total, page, limit))


@router.get("/{kebele_id}", response_model=ApiResponse[KebeleRead], summary="Get Kebele")
async def get_kebele(kebele_id: int, admin: AdminDep, offices: OfficeServiceDep):
    return ok(await offices.read_kebele(await offices.get_kebele(kebele_id)))


@router.post(
    "/",
    response_model=ApiResponse[KebeleRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Kebele",
    responses={400: {"description": "Kebele number or manager email already exists"}},
)
async def create_kebele(payload: KebeleCreate, admin: AdminDep, offices: OfficeServiceDep):
    """
    Create a kebele.

    - **kebele_number**: Unique kebele number
    - **manager**: Optional; creates a KEBELE_MANAGER account linked to the kebele
    """
    kebele = await offices.create_kebele(payload)
    return ok(await offices.read_kebele(kebele), "Kebele created successfully")


@router.put("/{kebele_id}", response_model=ApiResponse[KebeleRead], summary="Update Kebele")
async def update_kebele(kebele_id: int, payload: KebeleUpdate, admin: AdminDep, offices: OfficeServiceDep):
    kebele = await offices.update_kebele(kebele_id, payload)
    return ok(await offices.read_kebele(kebele), "Kebele updated successfully")


@router.delete("/{kebele_id}", response_model=ApiResponse[None], summary="Delete Kebele")
async def delete_kebele(kebele_id: int, admin: AdminDep, offices: OfficeServiceDep):
    await offices.delete_kebele(kebele_id)
    return ok(message="Kebele deleted successfully")
