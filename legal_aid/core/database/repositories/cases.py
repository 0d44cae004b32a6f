"""
Case repositories.

This module provides data access for cases, their coordinator/lawyer
assignments and the case activity timeline.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from legal_aid.core.models.domain.enums import AssignmentStatus, CaseStatus

from ..entities.cases import Case, CaseActivity, CaseAssignment
from ..entities.offices import Office
from .base import BaseRepository, QueryBuilder


class CaseRepository(BaseRepository[Case]):
    """Repository for case records."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Case)

    async def lock_office(self, office_id: int) -> Optional[Office]:
        """Load an office with a row lock held until the transaction ends.

        Serializes concurrent case registrations for the same office on
        backends that support ``SELECT ... FOR UPDATE``; SQLite ignores it.
        """
        stmt = select(Office).where(Office.id == office_id).with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def search(
        self,
        *,
        office_id: Optional[int] = None,
        client_id: Optional[int] = None,
        lawyer_id: Optional[int] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        kebele: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[Case], int]:
        """List cases matching the given filters, newest first.

        Returns:
            The requested page and the total number of matching cases.
        """
        stmt = QueryBuilder.apply_filters(
            select(Case),
            Case,
            {
                "office_id": office_id,
                "client_id": client_id,
                "lawyer_id": lawyer_id,
                "status": status,
                "category": category,
                "kebele": kebele,
            },
        )
        total_result = await self.session.execute(select(func.count()).select_from(stmt.subquery()))
        total = int(total_result.scalar_one())

        stmt = stmt.order_by(Case.created_at.desc(), Case.id.desc())  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def list_open_for_clients(self, client_ids: List[int]) -> List[Case]:
        """PENDING and ACTIVE cases of the given clients, newest first."""
        if not client_ids:
            return []
        stmt = (
            select(Case)
            .where(Case.client_id.in_(client_ids))  # type: ignore[union-attr]
            .where(Case.status.in_([CaseStatus.PENDING.value, CaseStatus.ACTIVE.value]))  # type: ignore[attr-defined]
            .order_by(Case.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_assignable(self) -> List[Case]:
        """Cases that still need a lawyer: no lawyer yet or still PENDING."""
        stmt = (
            select(Case)
            .where(or_(Case.lawyer_id.is_(None), Case.status == CaseStatus.PENDING.value))  # type: ignore[union-attr]
            .where(Case.status.notin_([CaseStatus.RESOLVED.value, CaseStatus.CANCELLED.value]))  # type: ignore[attr-defined]
            .order_by(Case.created_at.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(
        self, *, office_id: Optional[int] = None, client_id: Optional[int] = None, kebele: Optional[str] = None
    ) -> Dict[str, int]:
        stmt = select(Case.status, func.count(Case.id)).group_by(Case.status)
        stmt = QueryBuilder.apply_filters(stmt, Case, {"office_id": office_id, "client_id": client_id, "kebele": kebele})
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}

    async def count_by_category(self) -> Dict[str, int]:
        stmt = select(Case.category, func.count(Case.id)).group_by(Case.category)
        result = await self.session.execute(stmt)
        return {category: count for category, count in result.all()}


class CaseAssignmentRepository(BaseRepository[CaseAssignment]):
    """Repository for coordinator and lawyer assignments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CaseAssignment)

    async def open_for_case(self, case_id: int, assignee_role: Optional[str] = None) -> List[CaseAssignment]:
        """PENDING or ACCEPTED assignments of a case, optionally for one role."""
        stmt = select(CaseAssignment).where(
            CaseAssignment.case_id == case_id,
            CaseAssignment.status.in_(  # type: ignore[attr-defined]
                [AssignmentStatus.PENDING.value, AssignmentStatus.ACCEPTED.value]
            ),
        )
        if assignee_role is not None:
            stmt = stmt.where(CaseAssignment.assignee_role == assignee_role)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_assignee(
        self, user_id: int, status: Optional[str] = None
    ) -> List[CaseAssignment]:
        stmt = select(CaseAssignment).where(CaseAssignment.assigned_to_id == user_id)
        if status is not None:
            stmt = stmt.where(CaseAssignment.status == status)
        stmt = stmt.order_by(CaseAssignment.assigned_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_active_by_assignee(self, assignee_role: str) -> Dict[int, int]:
        """Number of PENDING or ACCEPTED assignments per assignee of one role."""
        stmt = (
            select(CaseAssignment.assigned_to_id, func.count(CaseAssignment.id))
            .where(
                CaseAssignment.assignee_role == assignee_role,
                CaseAssignment.status.in_(  # type: ignore[attr-defined]
                    [AssignmentStatus.PENDING.value, AssignmentStatus.ACCEPTED.value]
                ),
            )
            .group_by(CaseAssignment.assigned_to_id)
        )
        result = await self.session.execute(stmt)
        return {user_id: count for user_id, count in result.all()}


class CaseActivityRepository(BaseRepository[CaseActivity]):
    """Repository for case timeline entries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CaseActivity)

    async def list_for_case(self, case_id: int) -> List[CaseActivity]:
        stmt = (
            select(CaseActivity)
            .where(CaseActivity.case_id == case_id)
            .order_by(CaseActivity.created_at.asc(), CaseActivity.id.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
