"""
Public Intake Endpoints.

Unauthenticated registration of a client together with their first case.
"""

from typing import List

from fastapi import APIRouter, status

from legal_aid.core.models.io import ApiResponse, ok
from legal_aid.core.models.io.cases import CaseRead, IntakeRegistration, IntakeResponse
from legal_aid.core.models.io.offices import OfficeRead
from legal_aid.core.models.io.users import UserRead
from legal_aid.server.services.deps import IntakeServiceDep

router = APIRouter()


@router.get(
    "/offices",
    response_model=ApiResponse[List[OfficeRead]],
    summary="List Offices",
    description="Active offices a client can register with.",
)
async def list_offices(intake: IntakeServiceDep):
    return ok([OfficeRead.model_validate(office) for office in await intake.list_offices()])


@router.post(
    "/register",
    response_model=ApiResponse[IntakeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register Client and Case",
    description="Create a client account, their intake profile and a PENDING case in the chosen office.",
    responses={
        400: {"description": "Email or phone already registered"},
        404: {"description": "Office not found"},
    },
)
async def register(payload: IntakeRegistration, intake: IntakeServiceDep):
    """
    Register a new client with their first case.

    - **office_id**: Office that will handle the case
    - **case_title** / **category**: What the case is about
    - **region** / **wereda** / **kebele**: Where the client lives

    The case is assigned to the coordinator of the office with the fewest
    pending assignments.
    """
    result = await intake.register(payload)
    return ok(
        IntakeResponse(
            user=UserRead.model_validate(result.user),
            case=CaseRead.model_validate(result.case),
            coordinator_id=result.case.coordinator_id,
        ),
        "Registration successful",
    )
