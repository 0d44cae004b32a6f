"""
Office and kebele repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from legal_aid.core.models.domain.enums import OfficeStatus

from ..entities.cases import Case
from ..entities.offices import Kebele, KebeleManager, Office
from ..entities.users import CoordinatorProfile, LawyerProfile
from .base import BaseRepository


class OfficeRepository(BaseRepository[Office]):
    """Repository for offices."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Office)

    async def get_by_name(self, name: str) -> Optional[Office]:
        stmt = select(Office).where(func.lower(Office.name) == name.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active(self) -> List[Office]:
        stmt = select(Office).where(Office.status == OfficeStatus.ACTIVE.value).order_by(Office.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_references(self, office_id: int) -> int:
        """Number of cases and staff profiles that point at the office."""
        total = 0
        for model in (Case, CoordinatorProfile, LawyerProfile):
            stmt = select(func.count()).select_from(model).where(model.office_id == office_id)
            result = await self.session.execute(stmt)
            total += int(result.scalar_one())
        return total


class KebeleRepository(BaseRepository[Kebele]):
    """Repository for kebeles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Kebele)

    async def get_by_number(self, kebele_number: str) -> Optional[Kebele]:
        stmt = select(Kebele).where(Kebele.kebele_number == kebele_number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_ordered(self) -> List[Kebele]:
        stmt = select(Kebele).order_by(Kebele.kebele_name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class KebeleManagerRepository(BaseRepository[KebeleManager]):
    """Repository for kebele manager links."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, KebeleManager)

    async def get_by_user(self, user_id: int) -> Optional[KebeleManager]:
        stmt = select(KebeleManager).where(KebeleManager.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_kebele(self, kebele_id: int) -> Optional[KebeleManager]:
        stmt = select(KebeleManager).where(KebeleManager.kebele_id == kebele_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()
