"""
User and profile repositories.

This module provides data access for accounts, the per-role profile tables
and issued auth sessions, including the coordinator workload aggregation used
by case auto-assignment.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from legal_aid.core.models.domain.enums import AssignmentStatus, CoordinatorStatus, UserRole, UserStatus

from ..entities.cases import Case, CaseAssignment
from ..entities.users import AuthSession, ClientProfile, CoordinatorProfile, LawyerProfile, User
from .base import BaseRepository, QueryBuilder


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_by_email_or_phone(self, email: str, phone: Optional[str]) -> Optional[User]:
        """Return any user already holding ``email`` or ``phone``."""
        conditions = [func.lower(User.email) == email.lower()]
        if phone:
            conditions.append(User.phone == phone)
        stmt = select(User).where(or_(*conditions)).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def search(
        self,
        *,
        role: Optional[str] = None,
        status: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[User], int]:
        """List users filtered by role, status and a name/email substring.

        Returns:
            The requested page and the total number of matching users.
        """
        stmt = select(User)
        stmt = QueryBuilder.apply_filters(stmt, User, {"role": role, "status": status})
        if query:
            pattern = f"%{query.lower()}%"
            stmt = stmt.where(or_(func.lower(User.full_name).like(pattern), func.lower(User.email).like(pattern)))

        total_result = await self.session.execute(select(func.count()).select_from(stmt.subquery()))
        total = int(total_result.scalar_one())

        stmt = stmt.order_by(User.created_at.desc())  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def count_by_role(self) -> dict[str, int]:
        stmt = select(User.role, func.count(User.id)).group_by(User.role)
        result = await self.session.execute(stmt)
        return {role: count for role, count in result.all()}

    async def count_with_custom_role(self, role_id: int) -> int:
        return await self.count({"role_id": role_id})


class ClientProfileRepository(BaseRepository[ClientProfile]):
    """Repository for client intake profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ClientProfile)

    async def get_by_user(self, user_id: int) -> Optional[ClientProfile]:
        stmt = select(ClientProfile).where(ClientProfile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def search_in_office(
        self,
        office_id: int,
        *,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        limit: int = 50,
    ) -> List[User]:
        """Clients registered with the office or holding a case there, matched by name or phone."""
        stmt = (
            select(User)
            .outerjoin(ClientProfile, ClientProfile.user_id == User.id)
            .where(User.role == UserRole.CLIENT.value)
            .where(
                or_(
                    ClientProfile.office_id == office_id,
                    User.id.in_(select(Case.client_id).where(Case.office_id == office_id)),  # type: ignore[union-attr]
                )
            )
        )
        if name:
            stmt = stmt.where(func.lower(User.full_name).like(f"%{name.lower()}%"))
        if phone:
            stmt = stmt.where(or_(User.phone.contains(phone), ClientProfile.phone.contains(phone)))  # type: ignore[union-attr]
        stmt = stmt.order_by(User.full_name.asc()).limit(limit)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())


class LawyerProfileRepository(BaseRepository[LawyerProfile]):
    """Repository for lawyer profiles and caseloads."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, LawyerProfile)

    async def get_by_user(self, user_id: int) -> Optional[LawyerProfile]:
        stmt = select(LawyerProfile).where(LawyerProfile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_users(self, office_id: Optional[int] = None) -> List[Tuple[LawyerProfile, User]]:
        """List lawyer profiles joined with their accounts, least loaded first."""
        stmt = select(LawyerProfile, User).join(User, User.id == LawyerProfile.user_id)
        if office_id is not None:
            stmt = stmt.where(LawyerProfile.office_id == office_id)
        stmt = stmt.order_by(LawyerProfile.current_caseload.asc(), LawyerProfile.id.asc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return [(profile, user) for profile, user in result.all()]

    async def find_available(self, office_id: int, category: str) -> Optional[LawyerProfile]:
        """Find an active, available lawyer of the office specialized in ``category``.

        Specializations are a JSON list stored as text, so the capacity and
        office filters run in SQL and the specialization match in Python.
        The least loaded match wins.
        """
        stmt = (
            select(LawyerProfile)
            .join(User, User.id == LawyerProfile.user_id)
            .where(
                LawyerProfile.office_id == office_id,
                LawyerProfile.is_available == True,  # noqa: E712
                LawyerProfile.current_caseload < LawyerProfile.max_caseload,
                User.status == UserStatus.ACTIVE.value,
            )
            .order_by(LawyerProfile.current_caseload.asc(), LawyerProfile.id.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        for profile in result.scalars().all():
            if category in profile.get_specializations_list():
                return profile
        return None


class CoordinatorProfileRepository(BaseRepository[CoordinatorProfile]):
    """Repository for coordinator profiles and workload queries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CoordinatorProfile)

    async def get_by_user(self, user_id: int) -> Optional[CoordinatorProfile]:
        stmt = select(CoordinatorProfile).where(CoordinatorProfile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _pending_counts(self):
        return (
            select(
                CaseAssignment.assigned_to_id.label("user_id"),  # type: ignore[attr-defined]
                func.count(CaseAssignment.id).label("pending"),
            )
            .where(
                CaseAssignment.assignee_role == UserRole.COORDINATOR.value,
                CaseAssignment.status == AssignmentStatus.PENDING.value,
            )
            .group_by(CaseAssignment.assigned_to_id)
            .subquery()
        )

    async def least_loaded(self, office_id: int) -> Optional[Tuple[CoordinatorProfile, int]]:
        """Pick the active coordinator of ``office_id`` with the fewest pending assignments.

        Ties go to the coordinator with the lowest profile id.

        Args:
            office_id: Office whose coordinators are considered

        Returns:
            The coordinator profile and its pending count, or None when the
            office has no active coordinator.
        """
        pending = self._pending_counts()
        load = func.coalesce(pending.c.pending, 0)
        stmt = (
            select(CoordinatorProfile, load.label("pending"))
            .join(User, User.id == CoordinatorProfile.user_id)
            .outerjoin(pending, pending.c.user_id == CoordinatorProfile.user_id)
            .where(
                CoordinatorProfile.office_id == office_id,
                CoordinatorProfile.status == CoordinatorStatus.ACTIVE.value,
                User.status == UserStatus.ACTIVE.value,
            )
            .order_by(load.asc(), CoordinatorProfile.id.asc())  # type: ignore[attr-defined]
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], int(row[1])

    async def workload(self, office_id: Optional[int] = None) -> List[Tuple[CoordinatorProfile, User, int]]:
        """Pending assignment count of every coordinator, busiest first."""
        pending = self._pending_counts()
        load = func.coalesce(pending.c.pending, 0)
        stmt = (
            select(CoordinatorProfile, User, load.label("pending"))
            .join(User, User.id == CoordinatorProfile.user_id)
            .outerjoin(pending, pending.c.user_id == CoordinatorProfile.user_id)
        )
        if office_id is not None:
            stmt = stmt.where(CoordinatorProfile.office_id == office_id)
        stmt = stmt.order_by(load.desc(), CoordinatorProfile.id.asc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return [(profile, user, int(count)) for profile, user, count in result.all()]


class AuthSessionRepository(BaseRepository[AuthSession]):
    """Repository for issued access token sessions."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AuthSession)

    async def get_active(self, token: str, now: datetime) -> Optional[AuthSession]:
        """Return the active, unexpired session for ``token``."""
        stmt = select(AuthSession).where(
            AuthSession.token == token,
            AuthSession.is_active == True,  # noqa: E712
            AuthSession.expires_at > now,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def deactivate_for_user(self, user_id: int) -> None:
        """Revoke every session of a user (flush only)."""
        stmt = update(AuthSession).where(AuthSession.user_id == user_id).values(is_active=False)
        await self.session.execute(stmt)
