"""
Case I/O models.

This module contains the schemas for public intake, client and coordinator
case registration, status changes, lawyer assignment and case detail views.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from legal_aid.core.models.domain.enums import (
    AssignmentStatus,
    CaseCategory,
    CaseStatus,
    Gender,
    Priority,
    UserRole,
)

from .users import ClientProfileRead, LawyerProfileRead, UserRead


class IntakeRegistration(BaseModel):
    """Public registration form: creates the client account and the first case."""

    full_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = Field(min_length=7, max_length=32)
    password: str = Field(min_length=8, max_length=128)
    age: Optional[int] = Field(default=None, ge=0, le=130)
    gender: Optional[Gender] = None
    monthly_income: Optional[float] = Field(default=None, ge=0)
    is_disabled: bool = False

    region: str = Field(min_length=1)
    zone: Optional[str] = None
    wereda: str = Field(min_length=1)
    kebele: str = Field(min_length=1)
    house_number: Optional[str] = None

    office_id: int
    case_title: str = Field(min_length=1, max_length=255)
    case_description: Optional[str] = None
    category: CaseCategory
    priority: Priority = Priority.MEDIUM


class ClientCaseCreate(BaseModel):
    """Case registered by a logged-in client."""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: CaseCategory
    priority: Priority = Priority.MEDIUM
    request_details: Optional[str] = None
    document_ids: List[int] = Field(default_factory=list)


class CoordinatorCaseCreate(BaseModel):
    """Case opened by a coordinator on behalf of a client."""

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    category: CaseCategory
    priority: Priority = Priority.MEDIUM
    region: Optional[str] = None
    zone: Optional[str] = None
    wereda: str = Field(min_length=1)
    kebele: str = Field(min_length=1)
    house_number: Optional[str] = None
    client_name: str = Field(min_length=1, max_length=255)
    client_phone: str = Field(min_length=1, max_length=32)
    client_id: Optional[int] = None


class WalkInClientCreate(BaseModel):
    """A client registered at the office by a coordinator.

    Without ``email`` a placeholder address is generated, and without
    ``password`` a temporary one is returned once in the response.
    """

    full_name: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=7, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)
    age: Optional[int] = Field(default=None, ge=0, le=130)
    gender: Optional[Gender] = None
    monthly_income: Optional[float] = Field(default=None, ge=0)
    is_disabled: bool = False

    region: str = Field(min_length=1)
    zone: Optional[str] = None
    wereda: str = Field(min_length=1)
    kebele: str = Field(min_length=1)
    house_number: Optional[str] = None


class WalkInClientRead(BaseModel):
    user: UserRead
    profile: ClientProfileRead
    temporary_password: Optional[str] = None


class CaseRead(BaseModel):
    """Schema for reading a case."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    category: CaseCategory
    priority: Priority
    status: CaseStatus
    client_id: Optional[int] = None
    client_name: str
    client_phone: Optional[str] = None
    office_id: int
    lawyer_id: Optional[int] = None
    coordinator_id: Optional[int] = None
    region: Optional[str] = None
    zone: Optional[str] = None
    wereda: Optional[str] = None
    kebele: Optional[str] = None
    house_number: Optional[str] = None
    request_details: Optional[str] = None
    notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class CaseActivityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    case_id: int
    user_id: Optional[int] = None
    activity_type: str
    title: str
    description: Optional[str] = None
    created_at: datetime


class AssignmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    case_id: int
    assigned_to_id: int
    assigned_by_id: Optional[int] = None
    assignee_role: UserRole
    status: AssignmentStatus
    notes: Optional[str] = None
    assigned_at: datetime
    completed_at: Optional[datetime] = None


class CaseDetail(BaseModel):
    case: CaseRead
    activities: List[CaseActivityRead]
    assignments: List[AssignmentRead]


class CaseStatusUpdate(BaseModel):
    status: CaseStatus
    note: Optional[str] = None


class CaseReject(BaseModel):
    reason: Optional[str] = None


class AssignLawyerRequest(BaseModel):
    lawyer_id: int
    notes: Optional[str] = None


class AdminAssignRequest(AssignLawyerRequest):
    case_id: int


class AssignmentDecision(BaseModel):
    accept: bool
    notes: Optional[str] = None


class LawyerCaseload(BaseModel):
    user: UserRead
    profile: LawyerProfileRead


class AssignableCases(BaseModel):
    cases: List[CaseRead]
    lawyers: List[LawyerCaseload]


class ClientStats(BaseModel):
    total_cases: int
    cases_by_status: dict[str, int]
    upcoming_appointments: int
    pending_documents: int
    unread_notifications: int


class IntakeResponse(BaseModel):
    user: UserRead
    case: CaseRead
    coordinator_id: Optional[int] = None


class ClientSearchResult(BaseModel):
    """A client of the office with their PENDING and ACTIVE cases."""

    user: UserRead
    open_cases: List[CaseRead]
