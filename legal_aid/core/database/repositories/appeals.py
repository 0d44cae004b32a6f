"""
Appeal repositories.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from legal_aid.core.models.domain.enums import AppealStatus

from ..entities.appeals import Appeal, AppealHearing
from .base import BaseRepository, QueryBuilder


class AppealRepository(BaseRepository[Appeal]):
    """Repository for appeals."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Appeal)

    async def has_pending(self, lawyer_id: int) -> bool:
        stmt = (
            select(func.count())
            .select_from(Appeal)
            .where(Appeal.lawyer_id == lawyer_id, Appeal.status == AppealStatus.PENDING.value)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one()) > 0

    async def get_for_lawyer(self, appeal_id: int, lawyer_id: int) -> Optional[Appeal]:
        stmt = select(Appeal).where(Appeal.id == appeal_id, Appeal.lawyer_id == lawyer_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def page(
        self,
        *,
        lawyer_id: Optional[int] = None,
        status: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Appeal], int]:
        """Return one page of appeals, newest first, and the total count."""
        stmt = QueryBuilder.apply_filters(select(Appeal), Appeal, {"lawyer_id": lawyer_id, "status": status})
        total_result = await self.session.execute(select(func.count()).select_from(stmt.subquery()))
        total = int(total_result.scalar_one())

        stmt = stmt.order_by(Appeal.filed_at.desc(), Appeal.id.desc())  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total


class AppealHearingRepository(BaseRepository[AppealHearing]):
    """Repository for appeal hearings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AppealHearing)

    async def list_for_appeal(self, appeal_id: int) -> List[AppealHearing]:
        stmt = (
            select(AppealHearing)
            .where(AppealHearing.appeal_id == appeal_id)
            .order_by(AppealHearing.scheduled_date.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_for_appeal(self, appeal_id: int) -> int:
        """Stage deletion of every hearing of an appeal; the caller commits."""
        hearings = await self.list_for_appeal(appeal_id)
        for hearing in hearings:
            await self.session.delete(hearing)
        return len(hearings)
