"""
Appointment entity model.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Appointment(Base, table=True):
    """Meeting between a client and a coordinator.

    Table: appointments
    """

    __tablename__ = "appointments"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="users.id", index=True)
    coordinator_id: int = Field(foreign_key="users.id", index=True)
    case_id: Optional[int] = Field(default=None, foreign_key="cases.id")

    scheduled_time: datetime = Field(index=True)
    duration: int = Field(default=30, description="Duration in minutes")
    purpose: str = Field(max_length=255)
    case_type: Optional[str] = Field(default=None, max_length=32)
    venue: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, sa_type=Text)
    status: str = Field(default="SCHEDULED", max_length=32, index=True)
    reminder_sent: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def end_time(self) -> datetime:
        return self.scheduled_time + timedelta(minutes=self.duration)
