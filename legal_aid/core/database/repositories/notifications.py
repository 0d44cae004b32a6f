"""
Notification repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from legal_aid.core.models.domain.enums import NotificationStatus

from ..entities.notifications import Notification
from .base import BaseRepository, QueryBuilder


class NotificationRepository(BaseRepository[Notification]):
    """Repository for in-app notifications."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def list_for_user(
        self, user_id: int, *, unread_only: bool = False, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Notification]:
        stmt = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            stmt = stmt.where(Notification.status == NotificationStatus.UNREAD.value)
        stmt = stmt.order_by(Notification.created_at.desc(), Notification.id.desc())  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_unread(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(Notification).where(
            Notification.user_id == user_id,
            Notification.status == NotificationStatus.UNREAD.value,
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def mark_all_read(self, user_id: int, now: datetime) -> int:
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.status == NotificationStatus.UNREAD.value)
            .values(status=NotificationStatus.READ.value, read_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return int(result.rowcount or 0)
