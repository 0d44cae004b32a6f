"""
Roles & Permissions Endpoints.

Custom roles bundle permission keys (``MODULE:ACTION``). The built-in system
roles are listed alongside them but cannot be modified or deleted.
"""

from typing import List

from fastapi import APIRouter, status

from legal_aid.core.models.io import ApiResponse, ok
from legal_aid.core.models.io.access import PermissionRead, RoleCreate, RoleRead, RoleUpdate
from legal_aid.server.services.deps import AccessServiceDep, AdminDep

router = APIRouter()


@router.get("/", response_model=ApiResponse[List[RoleRead]], summary="List Roles")
async def list_roles(admin: AdminDep, access: AccessServiceDep):
    return ok(await access.list_roles())


@router.get("/permissions", response_model=ApiResponse[List[PermissionRead]], summary="List Permissions")
async def list_permissions(admin: AdminDep, access: AccessServiceDep):
    return ok([PermissionRead.model_validate(p) for p in await access.list_permissions()])


@router.get("/{role_id}", response_model=ApiResponse[RoleRead], summary="Get Role")
async def get_role(role_id: int, admin: AdminDep, access: AccessServiceDep):
    return ok(await access.read(await access.get_role(role_id)))


@router.post(
    "/",
    response_model=ApiResponse[RoleRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Role",
    responses={400: {"description": "Name taken, no permissions, or unknown permission keys"}},
)
async def create_role(payload: RoleCreate, admin: AdminDep, access: AccessServiceDep):
    """
    Create a custom role.

    - **name**: Unique role name
    - **permissions**: Permission names such as ``CASES_VIEW``; at least one is required
    """
    return ok(await access.create_role(payload), "Role created successfully")


@router.put(
    "/{role_id}",
    response_model=ApiResponse[RoleRead],
    summary="Update Role",
    responses={403: {"description": "System roles cannot be modified"}},
)
async def update_role(role_id: int, payload: RoleUpdate, admin: AdminDep, access: AccessServiceDep):
    return ok(await access.update_role(role_id, payload), "Role updated successfully")


@router.delete(
    "/{role_id}",
    response_model=ApiResponse[None],
    summary="Delete Role",
    responses={
        400: {"description": "Cannot delete role with assigned users"},
        403: {"description": "System roles cannot be modified"},
    },
)
async def delete_role(role_id: int, admin: AdminDep, access: AccessServiceDep):
    await access.delete_role(role_id)
    return ok(message="Role deleted successfully")
