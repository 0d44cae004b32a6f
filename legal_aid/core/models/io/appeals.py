"""
Appeal I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from legal_aid.core.models.domain.enums import AppealStatus, HearingStatus


class AppealCreate(BaseModel):
    case_id: int
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    hearing_date: Optional[datetime] = None


class AppealUpdate(BaseModel):
    """A lawyer's edit of their own appeal. The only status a lawyer may set is WITHDRAWN."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    hearing_date: Optional[datetime] = None
    status: Optional[AppealStatus] = None


class AppealDecision(BaseModel):
    status: AppealStatus
    decision: Optional[str] = None


class HearingCreate(BaseModel):
    scheduled_date: datetime
    location: str = Field(default="To be determined", max_length=255)
    notes: Optional[str] = None


class HearingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    appeal_id: int
    scheduled_date: datetime
    location: str
    status: HearingStatus
    notes: Optional[str] = None


class AppealRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    case_id: int
    lawyer_id: int
    title: str
    description: Optional[str] = None
    status: AppealStatus
    decision: Optional[str] = None
    filed_at: datetime
    decided_at: Optional[datetime] = None
    hearings: List[HearingRead] = Field(default_factory=list)
