"""
Notification entity model.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Notification(Base, table=True):
    """In-app notification addressed to one user.

    Table: notifications
    """

    __tablename__ = "notifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=255)
    message: str = Field(sa_type=Text)
    type: str = Field(default="SYSTEM", max_length=32)
    priority: str = Field(default="NORMAL", max_length=16)
    status: str = Field(default="UNREAD", max_length=16, index=True)
    link: Optional[str] = Field(default=None, max_length=512)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    read_at: Optional[datetime] = Field(default=None)
