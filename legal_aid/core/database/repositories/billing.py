"""
Billing repositories.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.billing import Payment, ServicePackage, ServiceRequest
from .base import BaseRepository


class ServicePackageRepository(BaseRepository[ServicePackage]):
    """Repository for service packages."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ServicePackage)

    async def get_by_name(self, name: str) -> Optional[ServicePackage]:
        stmt = select(ServicePackage).where(func.lower(ServicePackage.name) == name.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active(self) -> List[ServicePackage]:
        stmt = (
            select(ServicePackage)
            .where(ServicePackage.is_active == True)  # noqa: E712
            .order_by(ServicePackage.price.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class ServiceRequestRepository(BaseRepository[ServiceRequest]):
    """Repository for client service requests."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ServiceRequest)


class PaymentRepository(BaseRepository[Payment]):
    """Repository for payment attempts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Payment)

    async def get_by_tx_ref(self, tx_ref: str) -> Optional[Payment]:
        stmt = select(Payment).where(Payment.tx_ref == tx_ref)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
