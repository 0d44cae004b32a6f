"""
Notification I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from legal_aid.core.models.domain.enums import NotificationPriority, NotificationStatus, NotificationType


class NotificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    status: NotificationStatus
    link: Optional[str] = None
    created_at: datetime
    read_at: Optional[datetime] = None


class UnreadCount(BaseModel):
    unread: int
