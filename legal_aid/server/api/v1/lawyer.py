"""
Lawyer Portal Endpoints.

Assigned cases, assignment responses, case progress and appeals.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, status

from legal_aid.core.models.domain.enums import AppealStatus, AssignmentStatus, CaseStatus
from legal_aid.core.models.io import ApiResponse, Page, ok
from legal_aid.core.models.io.appeals import AppealCreate, AppealRead, AppealUpdate
from legal_aid.core.models.io.cases import (
    AssignmentDecision,
    AssignmentRead,
    CaseDetail,
    CaseRead,
    CaseStatusUpdate,
)
from legal_aid.server.services.deps import AppealServiceDep, CaseServiceDep, LawyerDep

router = APIRouter()


@router.get("/cases", response_model=ApiResponse[Page[CaseRead]], summary="List Assigned Cases")
async def list_cases(
    user: LawyerDep,
    cases: CaseServiceDep,
    status_filter: Annotated[Optional[CaseStatus], Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    items, total = await cases.list_lawyer_cases(user, status=status_filter, page=page, limit=limit)
    return ok(Page.build([CaseRead.model_validate(case) for case in items], total, page, limit))


@router.get(
    "/cases/{case_id}",
    response_model=ApiResponse[CaseDetail],
    summary="Get Assigned Case",
    responses={404: {"description": "Case not found or not assigned to you"}},
)
async def get_case(case_id: int, user: LawyerDep, cases: CaseServiceDep):
    return ok(await cases.get_lawyer_case(user, case_id))


@router.patch(
    "/cases/{case_id}/status",
    response_model=ApiResponse[CaseRead],
    summary="Change Case Status",
    responses={400: {"description": "Invalid status transition"}, 404: {"description": "Case not found or not assigned to you"}},
)
async def change_status(case_id: int, payload: CaseStatusUpdate, user: LawyerDep, cases: CaseServiceDep):
    case = await cases.lawyer_change_status(user, case_id, payload)
    return ok(CaseRead.model_validate(case), "Case status updated")


@router.get("/assignments", response_model=ApiResponse[List[AssignmentRead]], summary="List My Assignments")
async def list_assignments(
    user: LawyerDep,
    cases: CaseServiceDep,
    status_filter: Annotated[Optional[AssignmentStatus], Query(alias="status")] = None,
):
    return ok([AssignmentRead.model_validate(a) for a in await cases.list_lawyer_assignments(user, status_filter)])


@router.post(
    "/assignments/{assignment_id}/respond",
    response_model=ApiResponse[AssignmentRead],
    summary="Respond to Assignment",
    description="Accept or decline a pending case assignment.",
    responses={400: {"description": "Assignment is not pending"}, 404: {"description": "Assignment not found"}},
)
async def respond(assignment_id: int, payload: AssignmentDecision, user: LawyerDep, cases: CaseServiceDep):
    assignment = await cases.respond_to_assignment(user, assignment_id, payload)
    return ok(AssignmentRead.model_validate(assignment), "Assignment updated")


@router.post(
    "/appeals",
    response_model=ApiResponse[AppealRead],
    status_code=status.HTTP_201_CREATED,
    summary="File Appeal",
    responses={
        400: {"description": "You already have a pending appeal"},
        404: {"description": "Case not found or not assigned to you"},
    },
)
async def file_appeal(payload: AppealCreate, user: LawyerDep, appeals: AppealServiceDep):
    """
    File an appeal.

    - **case_id**: A case assigned to you
    - **hearing_date**: Optional; schedules a first hearing at a location to be determined

    Only one PENDING appeal per lawyer is allowed at a time.
    """
    appeal = await appeals.file(user, payload)
    return ok(await appeals.read(appeal), "Appeal filed successfully")


@router.get("/appeals", response_model=ApiResponse[Page[AppealRead]], summary="List My Appeals")
async def list_appeals(
    user: LawyerDep,
    appeals: AppealServiceDep,
    status_filter: Annotated[Optional[AppealStatus], Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    items, total = await appeals.page(lawyer_id=user.id, status=status_filter, page=page, limit=limit)
    return ok(Page.build([await appeals.read(appeal) for appeal in items], total, page, limit))


@router.put(
    "/appeals/{appeal_id}",
    response_model=ApiResponse[AppealRead],
    summary="Update Appeal",
    responses={
        400: {"description": "Invalid status transition"},
        403: {"description": "Lawyers can only withdraw an appeal"},
        404: {"description": "Appeal not found"},
    },
)
async def update_appeal(appeal_id: int, payload: AppealUpdate, user: LawyerDep, appeals: AppealServiceDep):
    """
    Edit an own appeal.

    - **title**, **description**: New text
    - **hearing_date**: Moves the next scheduled hearing
    - **status**: Only WITHDRAWN; decisions are made by an admin
    """
    appeal = await appeals.update(user, appeal_id, payload)
    return ok(await appeals.read(appeal), "Appeal updated")


@router.delete(
    "/appeals/{appeal_id}",
    response_model=ApiResponse[None],
    summary="Delete Appeal",
    description="Delete an own appeal and its hearings.",
    responses={404: {"description": "Appeal not found"}},
)
async def delete_appeal(appeal_id: int, user: LawyerDep, appeals: AppealServiceDep):
    await appeals.delete(user, appeal_id)
    return ok(message="Appeal deleted successfully")
