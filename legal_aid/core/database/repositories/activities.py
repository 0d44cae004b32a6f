"""
Audit log repository.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.activities import Activity
from .base import BaseRepository


class ActivityRepository(BaseRepository[Activity]):
    """Repository for the admin audit log."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Activity)

    async def record(self, action: str, user_id: Optional[int], details: Dict[str, Any]) -> Activity:
        """Stage an audit entry in the current transaction."""
        activity = Activity(action=action, user_id=user_id)
        activity.set_details_dict(details)
        return await self.add(activity)

    async def recent(self, limit: int = 10) -> List[Activity]:
        stmt = select(Activity).order_by(Activity.created_at.desc(), Activity.id.desc()).limit(limit)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
