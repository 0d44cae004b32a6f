"""Shared fixtures for unit tests: an in-memory database per test and row factories."""

from __future__ import annotations

from datetime import datetime
from typing import AsyncGenerator, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.pool import StaticPool

from legal_aid.core.database.base import Base
from legal_aid.core.database.entities.appointments import Appointment
from legal_aid.core.database.entities.cases import Case, CaseAssignment
from legal_aid.core.database.entities.offices import Office
from legal_aid.core.database.entities.users import ClientProfile, CoordinatorProfile, LawyerProfile, User
from legal_aid.core.database.repositories import RepoBundle, build_repos
from legal_aid.core.models.domain.enums import (
    AssignmentStatus,
    CaseCategory,
    CaseStatus,
    UserRole,
    UserStatus,
)
from legal_aid.core.security import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "Password123!"


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database with every table created."""
    import legal_aid.core.database.entities  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async_session_maker = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session_maker() as session:  # type: ignore[attr-defined]
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> RepoBundle:
    return build_repos(session)


class Factory:
    """Creates committed rows for tests."""

    password = DEFAULT_PASSWORD

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    async def office(self, name: Optional[str] = None, **fields) -> Office:
        return await self.repos.offices.create(
            Office(name=name or f"Office {self._next()}", location=fields.pop("location", "Addis Ababa"), **fields)
        )

    async def user(
        self,
        role: UserRole,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        status: UserStatus = UserStatus.ACTIVE,
        **fields,
    ) -> User:
        n = self._next()
        return await self.repos.users.create(
            User(
                email=email or f"{role.value.lower()}{n}@example.org",
                full_name=full_name or f"{role.value.title()} {n}",
                password_hash=hash_password(password),
                role=role.value,
                status=status.value,
                is_admin=role in (UserRole.ADMIN, UserRole.SUPER_ADMIN),
                **fields,
            )
        )

    async def admin(self, **fields) -> User:
        return await self.user(UserRole.ADMIN, **fields)

    async def coordinator(self, office: Office, **fields) -> User:
        profile_status = fields.pop("profile_status", "ACTIVE")
        user = await self.user(UserRole.COORDINATOR, **fields)
        await self.repos.coordinators.create(
            CoordinatorProfile(user_id=user.id, office_id=office.id, status=profile_status)
        )
        return user

    async def lawyer(
        self,
        office: Office,
        *,
        specializations: Optional[List[CaseCategory]] = None,
        max_caseload: int = 20,
        current_caseload: int = 0,
        **fields,
    ) -> User:
        user = await self.user(UserRole.LAWYER, **fields)
        profile = LawyerProfile(
            user_id=user.id,
            office_id=office.id,
            max_caseload=max_caseload,
            current_caseload=current_caseload,
        )
        profile.set_specializations_list([c.value for c in (specializations or [CaseCategory.FAMILY])])
        await self.repos.lawyers.create(profile)
        return user

    async def client(self, office: Office, *, kebele: Optional[str] = "Kebele 01", **fields) -> User:
        user = await self.user(UserRole.CLIENT, **fields)
        await self.repos.clients.create(
            ClientProfile(user_id=user.id, office_id=office.id, region="Addis Ababa", wereda="Bole", kebele=kebele)
        )
        return user

    async def case(
        self,
        office: Office,
        *,
        client: Optional[User] = None,
        status: CaseStatus = CaseStatus.PENDING,
        category: CaseCategory = CaseCategory.FAMILY,
        **fields,
    ) -> Case:
        return await self.repos.cases.create(
            Case(
                title=fields.pop("title", f"Case {self._next()}"),
                category=category.value,
                status=status.value,
                client_id=client.id if client else None,
                client_name=client.full_name if client else "Walk-in Client",
                client_phone="0911000000",
                office_id=office.id,
                kebele=fields.pop("kebele", "Kebele 01"),
                **fields,
            )
        )

    async def pending_coordinator_assignment(self, case: Case, coordinator: User) -> CaseAssignment:
        return await self.repos.assignments.create(
            CaseAssignment(
                case_id=case.id,
                assigned_to_id=coordinator.id,
                assignee_role=UserRole.COORDINATOR.value,
                status=AssignmentStatus.PENDING.value,
            )
        )

    async def appointment(self, client: User, coordinator: User, start: datetime, duration: int = 30, **fields):
        return await self.repos.appointments.create(
            Appointment(
                client_id=client.id,
                coordinator_id=coordinator.id,
                scheduled_time=start,
                duration=duration,
                purpose=fields.pop("purpose", "Consultation"),
                **fields,
            )
        )


@pytest.fixture
def factory(repos: RepoBundle) -> Factory:
    return Factory(repos)
