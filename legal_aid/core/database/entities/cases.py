"""
Case entity models.

This module contains the case record, the assignment rows that hand a case to
a coordinator or a lawyer, and the per-case activity timeline.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Case(Base, table=True):
    """Legal aid case.

    ``client_id`` is empty for cases a coordinator opens on behalf of a walk-in
    client; ``client_name`` and ``client_phone`` are always filled.

    Table: cases
    """

    __tablename__ = "cases"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    category: str = Field(max_length=32, index=True)
    priority: str = Field(default="MEDIUM", max_length=16)
    status: str = Field(default="PENDING", max_length=32, index=True)

    client_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    client_name: str = Field(max_length=255)
    client_phone: Optional[str] = Field(default=None, max_length=32)
    office_id: int = Field(foreign_key="offices.id", index=True)
    lawyer_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    coordinator_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)

    region: Optional[str] = Field(default=None, max_length=128)
    zone: Optional[str] = Field(default=None, max_length=128)
    wereda: Optional[str] = Field(default=None, max_length=128)
    kebele: Optional[str] = Field(default=None, max_length=128, index=True)
    house_number: Optional[str] = Field(default=None, max_length=32)

    request_details: Optional[str] = Field(default=None, sa_type=Text)
    notes: Optional[str] = Field(default=None, sa_type=Text)
    resolved_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Case(id={self.id}, status={self.status}, office_id={self.office_id})"


class CaseAssignment(Base, table=True):
    """Hand-off of a case to a coordinator or a lawyer.

    Table: case_assignments
    """

    __tablename__ = "case_assignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    case_id: int = Field(foreign_key="cases.id", index=True)
    assigned_to_id: int = Field(foreign_key="users.id", index=True)
    assigned_by_id: Optional[int] = Field(default=None, foreign_key="users.id")
    assignee_role: str = Field(max_length=32, index=True)
    status: str = Field(default="PENDING", max_length=32, index=True)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    assigned_at: datetime = Field(default_factory=utc_now)
    completed_at: Optional[datetime] = Field(default=None)


class CaseActivity(Base, table=True):
    """Entry of a case timeline.

    Table: case_activities
    """

    __tablename__ = "case_activities"

    id: Optional[int] = Field(default=None, primary_key=True)
    case_id: int = Field(foreign_key="cases.id", index=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")
    activity_type: str = Field(max_length=32)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)

    created_at: datetime = Field(default_factory=utc_now, index=True)
