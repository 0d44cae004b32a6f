"""
Coordinator Portal Endpoints.

Triage of the cases of the coordinator's office: creation on behalf of
walk-in clients, client registration and lookup, status changes, rejection,
lawyer assignment, document review and appointments.
"""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, status

from legal_aid.core.models.domain.enums import AppointmentStatus, CaseStatus, ClientSearchField, DocumentStatus
from legal_aid.core.models.io import ApiResponse, Page, ok
from legal_aid.core.models.io.appointments import AppointmentCreate, AppointmentRead, AppointmentUpdate
from legal_aid.core.models.io.cases import (
    AssignLawyerRequest,
    AssignmentRead,
    CaseDetail,
    CaseRead,
    CaseReject,
    CaseStatusUpdate,
    ClientSearchResult,
    CoordinatorCaseCreate,
    LawyerCaseload,
    WalkInClientCreate,
    WalkInClientRead,
)
from legal_aid.core.models.io.documents import DocumentRead, DocumentReview
from legal_aid.core.models.io.users import ClientProfileRead, UserRead
from legal_aid.server.services.deps import (
    CaseServiceDep,
    CoordinatorDep,
    DocumentServiceDep,
    IntakeServiceDep,
    SchedulingServiceDep,
)

router = APIRouter()


@router.post(
    "/cases",
    response_model=ApiResponse[CaseRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create Case",
    description="Open a case in the coordinator's office on behalf of a client.",
    responses={400: {"description": "Missing required fields"}},
)
async def create_case(payload: CoordinatorCaseCreate, user: CoordinatorDep, cases: CaseServiceDep):
    """
    Create a case.

    - **title**, **category**: Case subject
    - **wereda**, **kebele**: Client location
    - **client_name**, **client_phone**: Client contact
    """
    case = await cases.create_coordinator_case(user, payload)
    return ok(CaseRead.model_validate(case), "Case created successfully")


@router.get("/cases", response_model=ApiResponse[Page[CaseRead]], summary="List Office Cases")
async def list_cases(
    user: CoordinatorDep,
    cases: CaseServiceDep,
    status_filter: Annotated[Optional[CaseStatus], Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    items, total = await cases.list_office_cases(user, status=status_filter, page=page, limit=limit)
    return ok(Page.build([CaseRead.model_validate(case) for case in items], total, page, limit))


@router.get(
    "/cases/{case_id}",
    response_model=ApiResponse[CaseDetail],
    summary="Get Office Case",
    responses={404: {"description": "Case not found in your office"}},
)
async def get_case(case_id: int, user: CoordinatorDep, cases: CaseServiceDep):
    return ok(await cases.get_office_case(user, case_id))


@router.patch(
    "/cases/{case_id}/status",
    response_model=ApiResponse[CaseRead],
    summary="Change Case Status",
    responses={400: {"description": "Invalid status transition"}, 404: {"description": "Case not found in your office"}},
)
async def change_status(case_id: int, payload: CaseStatusUpdate, user: CoordinatorDep, cases: CaseServiceDep):
    case = await cases.coordinator_change_status(user, case_id, payload)
    return ok(CaseRead.model_validate(case), "Case status updated")


@router.post(
    "/cases/{case_id}/reject",
    response_model=ApiResponse[CaseRead],
    summary="Reject Case",
    responses={400: {"description": "Rejection reason is required"}, 404: {"description": "Case not found in your office"}},
)
async def reject_case(case_id: int, payload: CaseReject, user: CoordinatorDep, cases: CaseServiceDep):
    case = await cases.reject_case(user, case_id, payload.reason)
    return ok(CaseRead.model_validate(case), "Case rejected")


@router.post(
    "/cases/{case_id}/assign-lawyer",
    response_model=ApiResponse[AssignmentRead],
    summary="Assign Lawyer",
    description="Assign a lawyer of the coordinator's office. The lawyer must accept the assignment.",
    responses={400: {"description": "Lawyer has reached maximum caseload"}, 404: {"description": "Lawyer not found in your office"}},
)
async def assign_lawyer(case_id: int, payload: AssignLawyerRequest, user: CoordinatorDep, cases: CaseServiceDep):
    assignment = await cases.coordinator_assign_lawyer(user, case_id, payload)
    return ok(AssignmentRead.model_validate(assignment), "Lawyer assigned")


@router.post(
    "/clients",
    response_model=ApiResponse[WalkInClientRead],
    status_code=status.HTTP_201_CREATED,
    summary="Register Client",
    description="Register a walk-in client with the coordinator's office.",
    responses={400: {"description": "Office not active or email/phone already registered"}},
)
async def register_client(payload: WalkInClientCreate, user: CoordinatorDep, intake: IntakeServiceDep):
    """
    Register a client.

    - **full_name**, **phone**: Client contact
    - **region**, **wereda**, **kebele**: Client location
    - **email**, **password**: Optional; a temporary password is returned when omitted
    """
    result = await intake.register_walk_in(user, payload)
    return ok(
        WalkInClientRead(
            user=UserRead.model_validate(result.user),
            profile=ClientProfileRead.model_validate(result.profile),
            temporary_password=result.temporary_password,
        ),
        "Client registered successfully",
    )


@router.get("/clients/search", response_model=ApiResponse[List[ClientSearchResult]], summary="Search Clients")
async def search_clients(
    user: CoordinatorDep,
    intake: IntakeServiceDep,
    query: Annotated[str, Query(min_length=1)],
    by: Annotated[ClientSearchField, Query(alias="type")] = ClientSearchField.NAME,
):
    return ok(await intake.search_clients(user, query, by))


@router.get("/lawyers", response_model=ApiResponse[List[LawyerCaseload]], summary="List Office Lawyers")
async def list_lawyers(user: CoordinatorDep, cases: CaseServiceDep):
    return ok(await cases.office_lawyers(user))


@router.get("/documents", response_model=ApiResponse[List[DocumentRead]], summary="List Office Documents")
async def list_documents(
    user: CoordinatorDep,
    documents: DocumentServiceDep,
    status_filter: Annotated[Optional[DocumentStatus], Query(alias="status")] = None,
):
    return ok([DocumentRead.model_validate(d) for d in await documents.list_for_coordinator(user, status_filter)])


@router.patch(
    "/documents/{document_id}",
    response_model=ApiResponse[DocumentRead],
    summary="Review Document",
    responses={400: {"description": "Invalid status transition"}, 404: {"description": "Document not found in your office"}},
)
async def review_document(document_id: int, payload: DocumentReview, user: CoordinatorDep, documents: DocumentServiceDep):
    document = await documents.review(user, document_id, payload)
    return ok(DocumentRead.model_validate(document), "Document reviewed")


@router.post(
    "/appointments",
    response_model=ApiResponse[AppointmentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Schedule Appointment",
    responses={400: {"description": "Time slot conflicts with an existing appointment"}},
)
async def create_appointment(payload: AppointmentCreate, user: CoordinatorDep, scheduling: SchedulingServiceDep):
    """
    Schedule an appointment with a client.

    - **client_id**: Client account id
    - **scheduled_time**: Start time
    - **duration**: Length in minutes
    - **purpose**, **case_type**: What the meeting is about
    """
    appointment = await scheduling.coordinator_book(user, payload)
    return ok(AppointmentRead.model_validate(appointment), "Appointment scheduled")


@router.get("/appointments", response_model=ApiResponse[List[AppointmentRead]], summary="List My Appointments")
async def list_appointments(
    user: CoordinatorDep,
    scheduling: SchedulingServiceDep,
    status_filter: Annotated[Optional[AppointmentStatus], Query(alias="status")] = None,
    upcoming: bool = False,
):
    appointments = await scheduling.list_for_coordinator(user, status=status_filter, upcoming=upcoming)
    return ok([AppointmentRead.model_validate(a) for a in appointments])


@router.patch(
    "/appointments/{appointment_id}",
    response_model=ApiResponse[AppointmentRead],
    summary="Update Appointment",
    description="Change the status of an appointment or reschedule it.",
    responses={400: {"description": "Invalid transition or time slot conflict"}, 404: {"description": "Appointment not found"}},
)
async def update_appointment(
    appointment_id: int, payload: AppointmentUpdate, user: CoordinatorDep, scheduling: SchedulingServiceDep
):
    appointment = await scheduling.update(user, appointment_id, payload)
    return ok(AppointmentRead.model_validate(appointment), "Appointment updated")
