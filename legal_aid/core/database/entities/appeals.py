"""
Appeal entity models.

Appeals are filed by the lawyer working a case to contest its outcome and may
have one or more scheduled hearings.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Appeal(Base, table=True):
    """Lawyer-filed appeal.

    Table: appeals
    """

    __tablename__ = "appeals"

    id: Optional[int] = Field(default=None, primary_key=True)
    case_id: int = Field(foreign_key="cases.id", index=True)
    lawyer_id: int = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    status: str = Field(default="PENDING", max_length=32, index=True)
    decision: Optional[str] = Field(default=None, sa_type=Text)

    filed_at: datetime = Field(default_factory=utc_now)
    decided_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class AppealHearing(Base, table=True):
    """Court hearing of an appeal.

    Table: appeal_hearings
    """

    __tablename__ = "appeal_hearings"

    id: Optional[int] = Field(default=None, primary_key=True)
    appeal_id: int = Field(foreign_key="appeals.id", index=True)
    scheduled_date: datetime
    location: str = Field(default="To be determined", max_length=255)
    status: str = Field(default="SCHEDULED", max_length=32)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    created_at: datetime = Field(default_factory=utc_now)
