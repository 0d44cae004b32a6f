"""
Appointment I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from legal_aid.core.models.domain.enums import AppointmentStatus, CaseCategory


class AppointmentCreate(BaseModel):
    """Appointment booked by a coordinator for one of their clients."""

    client_id: int
    scheduled_time: datetime
    duration: int = Field(ge=5, le=480, description="Duration in minutes")
    purpose: str = Field(min_length=1, max_length=255)
    case_type: CaseCategory
    case_id: Optional[int] = None
    venue: Optional[str] = None
    notes: Optional[str] = None


class ClientAppointmentCreate(BaseModel):
    """Appointment a client books in one of the free slots."""

    coordinator_id: int
    scheduled_time: datetime
    duration: int = Field(default=30, ge=5, le=480)
    purpose: str = Field(min_length=1, max_length=255)
    case_type: Optional[CaseCategory] = None
    case_id: Optional[int] = None
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    status: Optional[AppointmentStatus] = None
    scheduled_time: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, ge=5, le=480)
    venue: Optional[str] = None
    notes: Optional[str] = None


class AppointmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    coordinator_id: int
    case_id: Optional[int] = None
    scheduled_time: datetime
    duration: int
    purpose: str
    case_type: Optional[str] = None
    venue: Optional[str] = None
    notes: Optional[str] = None
    status: AppointmentStatus
    reminder_sent: bool


class SlotCoordinator(BaseModel):
    id: int
    name: str
    office: Optional[str] = None


class SlotRead(BaseModel):
    start_time: datetime
    end_time: datetime
    coordinator: SlotCoordinator


class ReminderRunResult(BaseModel):
    reminded: int
    appointment_ids: List[int]
