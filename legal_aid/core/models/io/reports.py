"""
Reporting I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from .users import UserRead


class UserCounts(BaseModel):
    total: int
    lawyers: int
    coordinators: int
    clients: int


class CaseCounts(BaseModel):
    total: int
    resolved: int
    by_status: Dict[str, int]
    by_category: Dict[str, int]


class ActivityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    action: str
    details: dict
    created_at: datetime


class DashboardStats(BaseModel):
    users: UserCounts
    cases: CaseCounts
    documents: Dict[str, int]
    recent_activities: List[ActivityRead]
    success_rate: float


class LawyerWorkload(BaseModel):
    lawyer: UserRead
    office_id: int
    current_caseload: int
    max_caseload: int
    utilization: float
    active_assignments: int


class CoordinatorWorkload(BaseModel):
    coordinator: UserRead
    office_id: int
    pending_assignments: int
