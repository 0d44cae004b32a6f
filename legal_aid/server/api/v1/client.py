"""
Client Portal Endpoints.

Case registration and tracking, profile, document upload and appointment
booking for logged-in clients.
"""

from datetime import date
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from legal_aid.core.models.domain.enums import CaseStatus, DocumentStatus, DocumentType
from legal_aid.core.models.io import ApiResponse, Page, ok
from legal_aid.core.models.io.appointments import AppointmentRead, ClientAppointmentCreate, SlotRead
from legal_aid.core.models.io.cases import CaseDetail, CaseRead, ClientCaseCreate, ClientStats
from legal_aid.core.models.io.documents import DocumentRead
from legal_aid.core.models.io.users import ClientProfileRead, ClientProfileUpdate, CurrentUserRead
from legal_aid.server.services.deps import (
    CaseServiceDep,
    ClientDep,
    DocumentServiceDep,
    SchedulingServiceDep,
    UserServiceDep,
)

router = APIRouter()


@router.post(
    "/cases",
    response_model=ApiResponse[CaseRead],
    status_code=status.HTTP_201_CREATED,
    summary="Register Case",
    description="Register a new case in the client's office.",
    responses={400: {"description": "User profile not found"}},
)
async def create_case(payload: ClientCaseCreate, user: ClientDep, cases: CaseServiceDep):
    """
    Register a case.

    - **title** / **category**: What the case is about
    - **document_ids**: Own previously uploaded documents to attach

    A coordinator is assigned automatically and, when available, a lawyer
    specialized in the category receives the case.
    """
    case = await cases.register_client_case(user, payload)
    return ok(CaseRead.model_validate(case), "Case registered successfully")


@router.get("/cases", response_model=ApiResponse[Page[CaseRead]], summary="List My Cases")
async def list_cases(
    user: ClientDep,
    cases: CaseServiceDep,
    status_filter: Annotated[Optional[CaseStatus], Query(alias="status")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    items, total = await cases.list_client_cases(user, status=status_filter, page=page, limit=limit)
    return ok(Page.build([CaseRead.model_validate(case) for case in items], total, page, limit))


@router.get(
    "/cases/{case_id}",
    response_model=ApiResponse[CaseDetail],
    summary="Get My Case",
    description="Case with its activity timeline and assignments.",
    responses={404: {"description": "Case not found"}},
)
async def get_case(case_id: int, user: ClientDep, cases: CaseServiceDep):
    return ok(await cases.get_client_case(user, case_id))


@router.get("/profile", response_model=ApiResponse[CurrentUserRead], summary="Get My Profile")
async def get_profile(user: ClientDep, users: UserServiceDep):
    return ok(await users.profile_of(user))


@router.put("/profile", response_model=ApiResponse[ClientProfileRead], summary="Update My Profile")
async def update_profile(payload: ClientProfileUpdate, user: ClientDep, users: UserServiceDep):
    profile = await users.update_client_profile(user, payload)
    return ok(ClientProfileRead.model_validate(profile), "Profile updated")


@router.get("/stats", response_model=ApiResponse[ClientStats], summary="My Dashboard Stats")
async def stats(user: ClientDep, cases: CaseServiceDep):
    return ok(await cases.client_stats(user))


@router.post(
    "/documents",
    response_model=ApiResponse[List[DocumentRead]],
    status_code=status.HTTP_201_CREATED,
    summary="Upload Documents",
    description="Upload one or more files as multipart form data.",
    responses={400: {"description": "No files provided, file too large or kebele missing"}},
)
async def upload_documents(
    user: ClientDep,
    documents: DocumentServiceDep,
    files: Annotated[Optional[List[UploadFile]], File()] = None,
    document_type: Annotated[DocumentType, Form()] = DocumentType.APPLICATION,
    title: Annotated[Optional[str], Form()] = None,
    case_id: Annotated[Optional[int], Form()] = None,
):
    incoming = [await documents.receive(upload) for upload in files or []]
    saved = await documents.upload(user, incoming, document_type=document_type, title=title, case_id=case_id)
    return ok([DocumentRead.model_validate(document) for document in saved], "Documents uploaded")


@router.get("/documents", response_model=ApiResponse[List[DocumentRead]], summary="List My Documents")
async def list_documents(
    user: ClientDep,
    documents: DocumentServiceDep,
    status_filter: Annotated[Optional[DocumentStatus], Query(alias="status")] = None,
):
    return ok([DocumentRead.model_validate(d) for d in await documents.list_for_client(user, status_filter)])


@router.get(
    "/appointments/slots",
    response_model=ApiResponse[Dict[str, List[SlotRead]]],
    summary="Available Slots",
    description="Free 30 minute weekday slots of the coordinators of the client's office, grouped by date.",
)
async def available_slots(
    user: ClientDep,
    scheduling: SchedulingServiceDep,
    start_date: Optional[date] = None,
    days: Annotated[int, Query(ge=1, le=31)] = 7,
    coordinator_id: Optional[int] = None,
):
    return ok(
        await scheduling.slots_for_client(user, coordinator_id=coordinator_id, start_date=start_date, days=days)
    )


@router.post(
    "/appointments",
    response_model=ApiResponse[AppointmentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Book Appointment",
    responses={400: {"description": "Time slot conflicts with an existing appointment"}},
)
async def book_appointment(payload: ClientAppointmentCreate, user: ClientDep, scheduling: SchedulingServiceDep):
    appointment = await scheduling.client_book(user, payload)
    return ok(AppointmentRead.model_validate(appointment), "Appointment booked")


@router.get("/appointments", response_model=ApiResponse[List[AppointmentRead]], summary="List My Appointments")
async def list_appointments(user: ClientDep, scheduling: SchedulingServiceDep, upcoming: bool = False):
    return ok([AppointmentRead.model_validate(a) for a in await scheduling.list_for_client(user, upcoming=upcoming)])
