"""
Admin Portal Endpoints.

Case assignment, user administration, appeal decisions, document oversight
and appointment reminders. Restricted to ADMIN and SUPER_ADMIN.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, status

from legal_aid.core.models.domain.enums import AppealStatus, CaseStatus, DocumentStatus, UserRole, UserStatus
from legal_aid.core.models.io import ApiResponse, Page, ok
from legal_aid.core.models.io.appeals import AppealDecision, AppealRead, HearingCreate, HearingRead
from legal_aid.core.models.io.appointments import ReminderRunResult
from legal_aid.core.models.io.cases import AdminAssignRequest, AssignableCases, AssignmentRead, CaseDetail, CaseRead
from legal_aid.core.models.io.documents import DocumentRead, DocumentReview
from legal_aid.core.models.io.users import (
    CurrentUserRead,
    LawyerProfileRead,
    LawyerProfileUpdate,
    StaffCreate,
    UserRead,
    UserRoleUpdate,
    UserStatusUpdate,
)
from legal_aid.server.services.deps import (
    AdminDep,
    AppealServiceDep,
    CaseServiceDep,
    DocumentServiceDep,
    SchedulingServiceDep,
    UserServiceDep,
)

router = APIRouter()


# ---------------------------------------------------------------------
# Cases
# ---------------------------------------------------------------------


@router.get("/cases", response_model=ApiResponse[Page[CaseRead]], summary="List All Cases")
async def list_cases(
    admin: AdminDep,
    cases: CaseServiceDep,
    office_id: Optional[int] = None,
    status_filter: Annotated[Optional[CaseStatus], Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    items, total = await cases.admin_cases(office_id=office_id, status=status_filter, page=page, limit=limit)
    return ok(Page.build([CaseRead.model_validate(case) for case in items], total, page, limit))


@router.get(
    "/cases/assignable",
    response_model=ApiResponse[AssignableCases],
    summary="Assignable Cases",
    description="Open cases without a lawyer or still PENDING, with every lawyer's caseload.",
)
async def assignable_cases(admin: AdminDep, cases: CaseServiceDep):
    return ok(await cases.assignable())


@router.post(
    "/cases/assign",
    response_model=ApiResponse[AssignmentRead],
    summary="Assign Case",
    description="Assign a lawyer directly. The case becomes ACTIVE and counts against the lawyer's caseload.",
    responses={400: {"description": "Lawyer has reached maximum caseload"}, 404: {"description": "Case or lawyer not found"}},
)
async def assign_case(payload: AdminAssignRequest, admin: AdminDep, cases: CaseServiceDep):
    assignment = await cases.admin_assign(admin, payload)
    return ok(AssignmentRead.model_validate(assignment), "Case assigned successfully")


@router.get("/cases/{case_id}", response_model=ApiResponse[CaseDetail], summary="Get Case")
async def get_case(case_id: int, admin: AdminDep, cases: CaseServiceDep):
    return ok(await cases.detail(await cases.get_case(case_id)))


# ---------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------


@router.get("/users", response_model=ApiResponse[Page[UserRead]], summary="List Users")
async def list_users(
    admin: AdminDep,
    users: UserServiceDep,
    role: Optional[UserRole] = None,
    status_filter: Annotated[Optional[UserStatus], Query(alias="status")] = None,
    q: Annotated[Optional[str], Query(max_length=100)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    items, total = await users.search(
        role=role, status=status_filter, query=q, limit=limit, offset=(page - 1) * limit
    )
    return ok(Page.build([UserRead.model_validate(user) for user in items], total, page, limit))


@router.post(
    "/users",
    response_model=ApiResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Staff Account",
    responses={400: {"description": "Duplicate email/phone or missing office"}},
)
async def create_user(payload: StaffCreate, admin: AdminDep, users: UserServiceDep):
    """
    Create a staff account.

    - **role**: LAWYER, COORDINATOR, ADMIN or KEBELE_MANAGER
    - **office_id**: Required for lawyers and coordinators
    - **specializations** / **max_caseload**: Lawyer profile fields
    - **kebele_id**: Required for kebele managers; the kebele must not have a manager yet
    """
    user = await users.create_staff(admin, payload)
    return ok(UserRead.model_validate(user), "User created successfully")


@router.get("/users/{user_id}", response_model=ApiResponse[CurrentUserRead], summary="Get User")
async def get_user(user_id: int, admin: AdminDep, users: UserServiceDep):
    return ok(await users.profile_of(await users.get_user(user_id)))


@router.patch(
    "/users/{user_id}/status",
    response_model=ApiResponse[UserRead],
    summary="Change User Status",
    description="Any status other than ACTIVE revokes all sessions of the user.",
)
async def change_user_status(user_id: int, payload: UserStatusUpdate, admin: AdminDep, users: UserServiceDep):
    user = await users.update_status(admin, user_id, payload)
    return ok(UserRead.model_validate(user), "User status updated")


@router.patch("/users/{user_id}/role", response_model=ApiResponse[UserRead], summary="Assign Custom Role")
async def assign_role(user_id: int, payload: UserRoleUpdate, admin: AdminDep, users: UserServiceDep):
    user = await users.assign_role(admin, user_id, payload)
    return ok(UserRead.model_validate(user), "Role assigned")


@router.patch(
    "/users/{user_id}/lawyer-profile",
    response_model=ApiResponse[LawyerProfileRead],
    summary="Update Lawyer Profile",
)
async def update_lawyer_profile(user_id: int, payload: LawyerProfileUpdate, admin: AdminDep, users: UserServiceDep):
    profile = await users.update_lawyer_profile(user_id, payload)
    return ok(LawyerProfileRead.model_validate(profile), "Lawyer profile updated")


# ---------------------------------------------------------------------
# Appeals
# ---------------------------------------------------------------------


@router.get("/appeals", response_model=ApiResponse[Page[AppealRead]], summary="List All Appeals")
async def list_appeals(
    admin: AdminDep,
    appeals: AppealServiceDep,
    lawyer_id: Optional[int] = None,
    status_filter: Annotated[Optional[AppealStatus], Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    items, total = await appeals.page(lawyer_id=lawyer_id, status=status_filter, page=page, limit=limit)
    return ok(Page.build([await appeals.read(appeal) for appeal in items], total, page, limit))


@router.post(
    "/appeals/{appeal_id}/decision",
    response_model=ApiResponse[AppealRead],
    summary="Decide Appeal",
    responses={400: {"description": "Invalid status transition"}, 404: {"description": "Appeal not found"}},
)
async def decide_appeal(appeal_id: int, payload: AppealDecision, admin: AdminDep, appeals: AppealServiceDep):
    appeal = await appeals.decide(admin, appeal_id, payload)
    return ok(await appeals.read(appeal), "Appeal updated")


@router.post(
    "/appeals/{appeal_id}/hearings",
    response_model=ApiResponse[HearingRead],
    status_code=status.HTTP_201_CREATED,
    summary="Schedule Hearing",
)
async def add_hearing(appeal_id: int, payload: HearingCreate, admin: AdminDep, appeals: AppealServiceDep):
    hearing = await appeals.add_hearing(admin, appeal_id, payload)
    return ok(HearingRead.model_validate(hearing), "Hearing scheduled")


# ---------------------------------------------------------------------
# Documents and appointments
# ---------------------------------------------------------------------


@router.get("/documents", response_model=ApiResponse[List[DocumentRead]], summary="List All Documents")
async def list_documents(
    admin: AdminDep,
    documents: DocumentServiceDep,
    status_filter: Annotated[Optional[DocumentStatus], Query(alias="status")] = None,
):
    return ok([DocumentRead.model_validate(d) for d in await documents.list_all(status_filter)])


@router.patch("/documents/{document_id}", response_model=ApiResponse[DocumentRead], summary="Review Document")
async def review_document(document_id: int, payload: DocumentReview, admin: AdminDep, documents: DocumentServiceDep):
    document = await documents.review(admin, document_id, payload)
    return ok(DocumentRead.model_validate(document), "Document reviewed")


@router.post(
    "/appointments/reminders",
    response_model=ApiResponse[ReminderRunResult],
    summary="Send Appointment Reminders",
    description="Notify clients of scheduled appointments starting within the next 24 hours.",
)
async def send_reminders(admin: AdminDep, scheduling: SchedulingServiceDep):
    return ok(await scheduling.send_reminders())
