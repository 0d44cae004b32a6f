"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances bound
to one session, so a service sees a single transaction across every table.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .access import PermissionRepository, RoleRepository
from .activities import ActivityRepository
from .appeals import AppealHearingRepository, AppealRepository
from .appointments import AppointmentRepository
from .billing import PaymentRepository, ServicePackageRepository, ServiceRequestRepository
from .cases import CaseActivityRepository, CaseAssignmentRepository, CaseRepository
from .documents import DocumentRepository
from .notifications import NotificationRepository
from .offices import KebeleManagerRepository, KebeleRepository, OfficeRepository
from .users import (
    AuthSessionRepository,
    ClientProfileRepository,
    CoordinatorProfileRepository,
    LawyerProfileRepository,
    UserRepository,
)


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    users: UserRepository
    clients: ClientProfileRepository
    lawyers: LawyerProfileRepository
    coordinators: CoordinatorProfileRepository
    auth_sessions: AuthSessionRepository
    offices: OfficeRepository
    kebeles: KebeleRepository
    kebele_managers: KebeleManagerRepository
    cases: CaseRepository
    assignments: CaseAssignmentRepository
    case_activities: CaseActivityRepository
    appeals: AppealRepository
    hearings: AppealHearingRepository
    documents: DocumentRepository
    appointments: AppointmentRepository
    packages: ServicePackageRepository
    service_requests: ServiceRequestRepository
    payments: PaymentRepository
    notifications: NotificationRepository
    roles: RoleRepository
    permissions: PermissionRepository
    activities: ActivityRepository

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def build_repos(session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        users=UserRepository(session),
        clients=ClientProfileRepository(session),
        lawyers=LawyerProfileRepository(session),
        coordinators=CoordinatorProfileRepository(session),
        auth_sessions=AuthSessionRepository(session),
        offices=OfficeRepository(session),
        kebeles=KebeleRepository(session),
        kebele_managers=KebeleManagerRepository(session),
        cases=CaseRepository(session),
        assignments=CaseAssignmentRepository(session),
        case_activities=CaseActivityRepository(session),
        appeals=AppealRepository(session),
        hearings=AppealHearingRepository(session),
        documents=DocumentRepository(session),
        appointments=AppointmentRepository(session),
        packages=ServicePackageRepository(session),
        service_requests=ServiceRequestRepository(session),
        payments=PaymentRepository(session),
        notifications=NotificationRepository(session),
        roles=RoleRepository(session),
        permissions=PermissionRepository(session),
        activities=ActivityRepository(session),
    )
