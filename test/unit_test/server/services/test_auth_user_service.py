"""
Unit tests for authentication and staff account management.

Tests cover:
- Login issues a token recorded as a server side session
- Wrong credentials and inactive accounts are refused
- Staff creation builds the profile of the requested role
- Deactivating an account revokes its sessions
"""

from __future__ import annotations

import pytest

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.offices import Kebele
from legal_aid.core.errors import Forbidden, NotFound, Unauthorized, ValidationFailed
from legal_aid.core.models.domain.enums import CaseCategory, UserRole, UserStatus
from legal_aid.core.models.io.users import LawyerProfileUpdate, StaffCreate, UserStatusUpdate
from legal_aid.core.security import decode_access_token
from legal_aid.server.core.config import AuthConfig
from legal_aid.server.services.auth import AuthService
from legal_aid.server.services.offices import OfficeService
from legal_aid.server.services.users import UserService

AUTH = AuthConfig(jwt_secret="unit-test-secret")


@pytest.fixture
def auth(repos) -> AuthService:
    return AuthService(repos, AUTH)


@pytest.fixture
def users(repos) -> UserService:
    return UserService(repos)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_records_session_and_office_claim(self, auth, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office, email="coord@example.org")

        issued = await auth.login("COORD@example.org", factory.password, user_agent="pytest")

        claims = decode_access_token(issued.token, secret=AUTH.jwt_secret)
        assert claims["sub"] == str(coordinator.id)
        assert claims["role"] == UserRole.COORDINATOR.value
        assert claims["office_id"] == office.id
        assert claims["is_admin"] is False
        session = await repos.auth_sessions.get_active(issued.token, utc_now())
        assert session.user_agent == "pytest"
        assert issued.user.last_login_at is not None

    @pytest.mark.asyncio
    async def test_wrong_password_is_unauthorized(self, auth, factory):
        user = await factory.admin()

        with pytest.raises(Unauthorized, match="Invalid credentials"):
            await auth.login(user.email, "not-the-password")

    @pytest.mark.asyncio
    async def test_unknown_email_is_unauthorized(self, auth):
        with pytest.raises(Unauthorized):
            await auth.login("nobody@example.org", "whatever")

    @pytest.mark.asyncio
    async def test_suspended_account_is_forbidden(self, auth, factory):
        user = await factory.admin(status=UserStatus.SUSPENDED)

        with pytest.raises(Forbidden, match="not active"):
            await auth.login(user.email, factory.password)

    @pytest.mark.asyncio
    async def test_logout_deactivates_session(self, auth, repos, factory):
        user = await factory.admin()
        issued = await auth.login(user.email, factory.password)

        await auth.logout(issued.token)

        assert await repos.auth_sessions.get_active(issued.token, utc_now()) is None

    @pytest.mark.asyncio
    async def test_change_password_checks_current(self, auth, factory):
        user = await factory.admin()

        with pytest.raises(ValidationFailed, match="incorrect"):
            await auth.change_password(user, "wrong", "NewPassword1!")
        await auth.change_password(user, factory.password, "NewPassword1!")

        assert (await auth.login(user.email, "NewPassword1!")).user.id == user.id


class TestStaffAccounts:
    @pytest.mark.asyncio
    async def test_create_lawyer_with_profile(self, users, repos, factory):
        admin = await factory.admin()
        office = await factory.office()

        lawyer = await users.create_staff(
            admin,
            StaffCreate(
                email="Lawyer@Example.org",
                full_name="Hana Girma",
                password="Password123!",
                role=UserRole.LAWYER,
                office_id=office.id,
                specializations=[CaseCategory.LABOR, CaseCategory.CIVIL],
                max_caseload=5,
            ),
        )

        assert lawyer.email == "lawyer@example.org"
        profile = await repos.lawyers.get_by_user(lawyer.id)
        assert profile.office_id == office.id
        assert profile.max_caseload == 5
        assert profile.get_specializations_list() == ["LABOR", "CIVIL"]
        current = await users.profile_of(lawyer)
        assert current.lawyer_profile.max_caseload == 5

    @pytest.mark.asyncio
    async def test_create_kebele_manager_links_kebele(self, users, repos, factory):
        admin = await factory.admin()
        kebele = await repos.kebeles.create(Kebele(kebele_name="Kebele 04", kebele_number="04"))

        manager = await users.create_staff(
            admin,
            StaffCreate(
                email="manager@example.org",
                full_name="Kebede Tadesse",
                password="Password123!",
                role=UserRole.KEBELE_MANAGER,
                kebele_id=kebele.id,
                position="Chair",
            ),
        )

        link = await repos.kebele_managers.get_by_user(manager.id)
        assert link.kebele_id == kebele.id
        assert link.position == "Chair"
        dashboard = await OfficeService(repos).manager_dashboard(manager)
        assert dashboard.kebele.id == kebele.id

    @pytest.mark.asyncio
    async def test_kebele_manager_requires_kebele(self, users, factory):
        admin = await factory.admin()

        with pytest.raises(ValidationFailed, match="kebele_id is required"):
            await users.create_staff(
                admin,
                StaffCreate(email="k@example.org", full_name="K", password="Password123!", role=UserRole.KEBELE_MANAGER),
            )

    @pytest.mark.asyncio
    async def test_kebele_manager_for_unknown_kebele(self, users, factory):
        admin = await factory.admin()

        with pytest.raises(NotFound, match="Kebele"):
            await users.create_staff(
                admin,
                StaffCreate(
                    email="k@example.org",
                    full_name="K",
                    password="Password123!",
                    role=UserRole.KEBELE_MANAGER,
                    kebele_id=999,
                ),
            )

    @pytest.mark.asyncio
    async def test_kebele_keeps_a_single_manager(self, users, repos, factory):
        admin = await factory.admin()
        kebele = await repos.kebeles.create(Kebele(kebele_name="Kebele 05", kebele_number="05"))
        payload = dict(password="Password123!", role=UserRole.KEBELE_MANAGER, kebele_id=kebele.id)
        await users.create_staff(admin, StaffCreate(email="first@example.org", full_name="First", **payload))

        with pytest.raises(ValidationFailed, match="already has a manager"):
            await users.create_staff(admin, StaffCreate(email="second@example.org", full_name="Second", **payload))

    @pytest.mark.asyncio
    async def test_coordinator_requires_office(self, users, factory):
        admin = await factory.admin()

        with pytest.raises(ValidationFailed, match="office_id is required"):
            await users.create_staff(
                admin,
                StaffCreate(email="c@example.org", full_name="C", password="Password123!", role=UserRole.COORDINATOR),
            )

    @pytest.mark.asyncio
    async def test_clients_cannot_be_created_by_admin(self, users, factory):
        admin = await factory.admin()

        with pytest.raises(ValidationFailed, match="intake"):
            await users.create_staff(
                admin, StaffCreate(email="x@example.org", full_name="X", password="Password123!", role=UserRole.CLIENT)
            )

    @pytest.mark.asyncio
    async def test_only_super_admin_creates_super_admin(self, users, factory):
        admin = await factory.admin()

        with pytest.raises(Forbidden):
            await users.create_staff(
                admin,
                StaffCreate(email="s@example.org", full_name="S", password="Password123!", role=UserRole.SUPER_ADMIN),
            )

    @pytest.mark.asyncio
    async def test_deactivation_revokes_sessions(self, users, auth, repos, factory):
        admin = await factory.admin()
        lawyer = await factory.lawyer(await factory.office())
        issued = await auth.login(lawyer.email, factory.password)

        updated = await users.update_status(admin, lawyer.id, UserStatusUpdate(status=UserStatus.SUSPENDED))

        assert updated.status == UserStatus.SUSPENDED.value
        assert await repos.auth_sessions.get_active(issued.token, utc_now()) is None

    @pytest.mark.asyncio
    async def test_admin_cannot_deactivate_self(self, users, factory):
        admin = await factory.admin()

        with pytest.raises(ValidationFailed, match="your own account"):
            await users.update_status(admin, admin.id, UserStatusUpdate(status=UserStatus.INACTIVE))

    @pytest.mark.asyncio
    async def test_search_filters_by_role_and_text(self, users, factory):
        office = await factory.office()
        await factory.lawyer(office, full_name="Meron Alemu")
        await factory.lawyer(office, full_name="Dawit Bekele")
        await factory.coordinator(office, full_name="Meron Coordinator")

        found, total = await users.search(role=UserRole.LAWYER, query="meron")

        assert total == 1
        assert found[0].full_name == "Meron Alemu"

    @pytest.mark.asyncio
    async def test_lawyer_profile_update_checks_office(self, users, factory):
        lawyer = await factory.lawyer(await factory.office())

        with pytest.raises(NotFound, match="Office"):
            await users.update_lawyer_profile(lawyer.id, LawyerProfileUpdate(office_id=9999))
