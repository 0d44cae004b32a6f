"""
Public intake service.

A walk-up registration creates the client account, its intake profile and the
first case in one transaction, then hands the case to a coordinator.
Coordinators also register walk-in clients of their office and look clients
up by name or phone.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from legal_aid.core.database.entities.cases import Case, CaseAssignment
from legal_aid.core.database.entities.offices import Office
from legal_aid.core.database.entities.users import ClientProfile, User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import (
    CaseActivityType,
    CaseStatus,
    ClientSearchField,
    NotificationType,
    OfficeStatus,
    UserRole,
    UserStatus,
)
from legal_aid.core.models.io.cases import (
    CaseRead,
    ClientSearchResult,
    IntakeRegistration,
    WalkInClientCreate,
)
from legal_aid.core.models.io.users import UserRead
from legal_aid.core.monitoring import log_case_event
from legal_aid.core.security import hash_password

from .assignment import CaseAssigner
from .notifications import NotificationService

logger = get_logger(__name__)

WALK_IN_EMAIL_DOMAIN = "walk-in.legal-aid.local"


@dataclass(frozen=True)
class IntakeResult:
    user: User
    profile: ClientProfile
    case: Case
    coordinator_assignment: Optional[CaseAssignment]


@dataclass(frozen=True)
class WalkInResult:
    user: User
    profile: ClientProfile
    temporary_password: Optional[str]


class IntakeService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos
        self.notifications = NotificationService(repos)
        self.assigner = CaseAssigner(repos, self.notifications)

    async def list_offices(self) -> List[Office]:
        return await self.repos.offices.list_active()

    async def register(self, payload: IntakeRegistration) -> IntakeResult:
        """Register a new client together with their first case.

        Raises:
            NotFound: The chosen office does not exist or is not active.
            ValidationFailed: The email or phone is already registered.
        """
        office = await self.repos.offices.get_by_id(payload.office_id)
        if office is None or office.status != OfficeStatus.ACTIVE.value:
            raise NotFound("Office not found")

        if await self.repos.users.find_by_email_or_phone(payload.email, payload.phone) is not None:
            raise ValidationFailed("A user with this email or phone already exists")

        user = await self.repos.users.add(
            User(
                email=payload.email.lower(),
                phone=payload.phone,
                full_name=payload.full_name,
                password_hash=hash_password(payload.password),
                role=UserRole.CLIENT.value,
                status=UserStatus.ACTIVE.value,
            )
        )
        profile = await self.repos.clients.add(
            ClientProfile(
                user_id=user.id,
                office_id=office.id,
                age=payload.age,
                gender=payload.gender.value if payload.gender else None,
                phone=payload.phone,
                region=payload.region,
                zone=payload.zone,
                wereda=payload.wereda,
                kebele=payload.kebele,
                house_number=payload.house_number,
                monthly_income=payload.monthly_income,
                is_disabled=payload.is_disabled,
            )
        )
        case = await self.repos.cases.add(
            Case(
                title=payload.case_title,
                description=payload.case_description,
                category=payload.category.value,
                priority=payload.priority.value,
                status=CaseStatus.PENDING.value,
                client_id=user.id,
                client_name=payload.full_name,
                client_phone=payload.phone,
                office_id=office.id,
                region=payload.region,
                zone=payload.zone,
                wereda=payload.wereda,
                kebele=payload.kebele,
                house_number=payload.house_number,
            )
        )
        await self.assigner.record_activity(
            case.id, CaseActivityType.CREATED, "Case registered", user_id=user.id, description=payload.case_description
        )
        assignment = await self.assigner.assign_coordinator(case, assigned_by_id=None)
        await self.notifications.notify(
            user.id,
            "Registration received",
            f"Your case '{case.title}' was registered and is pending review.",
            type=NotificationType.CASE_UPDATE,
            link=f"/client/cases/{case.id}",
        )

        try:
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            raise ValidationFailed("A user with this email or phone already exists") from e

        log_case_event(case.id, "registered", office_id=office.id, channel="intake")
        logger.info(f"Intake registration created user {user.id} and case {case.id}")
        return IntakeResult(user=user, profile=profile, case=case, coordinator_assignment=assignment)

    async def _coordinator_office(self, coordinator: User) -> Office:
        profile = await self.repos.coordinators.get_by_user(coordinator.id)
        if profile is None:
            raise Forbidden("Coordinator profile not found")
        office = await self.repos.offices.get_by_id(profile.office_id)
        if office is None or office.status != OfficeStatus.ACTIVE.value:
            raise ValidationFailed("Coordinator office is not active")
        return office

    async def register_walk_in(self, coordinator: User, payload: WalkInClientCreate) -> WalkInResult:
        """Register a client who came to the coordinator's office in person.

        Raises:
            Forbidden: The caller has no coordinator profile.
            ValidationFailed: The office is not active, or the email or phone
                is already registered.
        """
        office = await self._coordinator_office(coordinator)
        email = (payload.email or f"client.{secrets.token_hex(6)}@{WALK_IN_EMAIL_DOMAIN}").lower()
        if await self.repos.users.find_by_email_or_phone(email, payload.phone) is not None:
            raise ValidationFailed("A user with this email or phone already exists")
        temporary_password = None if payload.password else secrets.token_urlsafe(9)

        user = await self.repos.users.add(
            User(
                email=email,
                phone=payload.phone,
                full_name=payload.full_name,
                password_hash=hash_password(payload.password or temporary_password),
                role=UserRole.CLIENT.value,
                status=UserStatus.ACTIVE.value,
            )
        )
        profile = await self.repos.clients.add(
            ClientProfile(
                user_id=user.id,
                office_id=office.id,
                age=payload.age,
                gender=payload.gender.value if payload.gender else None,
                phone=payload.phone,
                region=payload.region,
                zone=payload.zone,
                wereda=payload.wereda,
                kebele=payload.kebele,
                house_number=payload.house_number,
                monthly_income=payload.monthly_income,
                is_disabled=payload.is_disabled,
            )
        )
        await self.repos.activities.record(
            "REGISTER_CLIENT", coordinator.id, {"user_id": user.id, "office_id": office.id}
        )
        try:
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            raise ValidationFailed("A user with this email or phone already exists") from e

        logger.info(f"Coordinator {coordinator.id} registered client {user.id} at office {office.id}")
        return WalkInResult(user=user, profile=profile, temporary_password=temporary_password)

    async def search_clients(self, coordinator: User, query: str, by: ClientSearchField) -> List[ClientSearchResult]:
        """Find clients of the coordinator's office by name or phone, with their open cases."""
        profile = await self.repos.coordinators.get_by_user(coordinator.id)
        if profile is None:
            raise Forbidden("Coordinator profile not found")
        query = query.strip()
        if not query:
            raise ValidationFailed("Search query is required")

        if by == ClientSearchField.NAME:
            clients = await self.repos.clients.search_in_office(profile.office_id, name=query)
        else:
            clients = await self.repos.clients.search_in_office(profile.office_id, phone=query)
        open_cases = await self.repos.cases.list_open_for_clients([client.id for client in clients])
        return [
            ClientSearchResult(
                user=UserRead.model_validate(client),
                open_cases=[CaseRead.model_validate(case) for case in open_cases if case.client_id == client.id],
            )
            for client in clients
        ]
