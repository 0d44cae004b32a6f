"""Unit tests for roles and the permission catalogue."""

from __future__ import annotations

import pytest

from legal_aid.core.errors import Forbidden, ValidationFailed
from legal_aid.core.models.domain.enums import UserRole
from legal_aid.core.models.domain.permissions import DEFAULT_PERMISSIONS, SYSTEM_ROLE_PERMISSIONS
from legal_aid.core.models.io.access import RoleCreate, RoleUpdate
from legal_aid.core.models.io.users import UserRoleUpdate
from legal_aid.server.services.access import AccessService
from legal_aid.server.services.users import UserService


@pytest.fixture
async def access(repos) -> AccessService:
    service = AccessService(repos)
    await service.seed_defaults()
    return service


class TestSeeding:
    @pytest.mark.asyncio
    async def test_seed_creates_catalogue_and_system_roles(self, access):
        permissions = await access.list_permissions()
        roles = await access.list_roles()

        assert len(permissions) == len(DEFAULT_PERMISSIONS)
        system = {role.name for role in roles if role.is_system_role}
        assert system == {role.value for role in SYSTEM_ROLE_PERMISSIONS}

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, access):
        await access.seed_defaults()

        assert len(await access.list_permissions()) == len(DEFAULT_PERMISSIONS)
        assert len(await access.list_roles()) == len(SYSTEM_ROLE_PERMISSIONS)

    @pytest.mark.asyncio
    async def test_system_role_counts_users_by_builtin_role(self, access, factory):
        await factory.lawyer(await factory.office())

        lawyer_role = next(role for role in await access.list_roles() if role.name == UserRole.LAWYER.value)

        assert lawyer_role.user_count == 1

    @pytest.mark.asyncio
    async def test_bootstrap_admin_created_once(self, access):
        first = await access.ensure_bootstrap_admin("Root@Example.org", "Bootstrap123!")
        second = await access.ensure_bootstrap_admin("root@example.org", "Bootstrap123!")

        assert first.id == second.id
        assert first.role == UserRole.SUPER_ADMIN.value
        assert await access.ensure_bootstrap_admin(None, None) is None


class TestCustomRoles:
    @pytest.mark.asyncio
    async def test_create_role_resolves_permission_names(self, access):
        role = await access.create_role(
            RoleCreate(name="Paralegal", permissions=["CASES_VIEW", "CASES_VIEW", "DOCUMENTS_VIEW"])
        )

        assert role.is_system_role is False
        assert sorted(role.permissions) == ["CASES_VIEW", "DOCUMENTS_VIEW"]
        assert role.user_count == 0

    @pytest.mark.asyncio
    async def test_unknown_permissions_are_listed(self, access):
        with pytest.raises(ValidationFailed) as exc_info:
            await access.create_role(RoleCreate(name="Broken", permissions=["CASES_VIEW", "LAUNCH_ROCKETS"]))

        assert exc_info.value.details == ["LAUNCH_ROCKETS"]

    @pytest.mark.asyncio
    async def test_role_needs_a_permission(self, access):
        with pytest.raises(ValidationFailed, match="At least one permission"):
            await access.create_role(RoleCreate(name="Empty", permissions=[]))

    @pytest.mark.asyncio
    async def test_duplicate_name_is_rejected(self, access):
        with pytest.raises(ValidationFailed, match="already exists"):
            await access.create_role(RoleCreate(name=UserRole.ADMIN.value, permissions=["CASES_VIEW"]))

    @pytest.mark.asyncio
    async def test_update_replaces_permissions(self, access):
        role = await access.create_role(RoleCreate(name="Reviewer", permissions=["CASES_VIEW"]))

        updated = await access.update_role(role.id, RoleUpdate(permissions=["DOCUMENTS_VIEW"]))

        assert updated.permissions == ["DOCUMENTS_VIEW"]

    @pytest.mark.asyncio
    async def test_system_roles_are_read_only(self, access):
        admin_role = next(role for role in await access.list_roles() if role.name == UserRole.ADMIN.value)

        with pytest.raises(Forbidden):
            await access.update_role(admin_role.id, RoleUpdate(description="changed"))
        with pytest.raises(Forbidden):
            await access.delete_role(admin_role.id)

    @pytest.mark.asyncio
    async def test_role_with_users_cannot_be_deleted(self, access, repos, factory):
        admin = await factory.admin()
        member = await factory.user(UserRole.COORDINATOR)
        role = await access.create_role(RoleCreate(name="Intake desk", permissions=["CASES_CREATE"]))
        await UserService(repos).assign_role(admin, member.id, UserRoleUpdate(role_id=role.id))

        with pytest.raises(ValidationFailed, match="assigned users"):
            await access.delete_role(role.id)

    @pytest.mark.asyncio
    async def test_unused_role_is_deleted(self, access, repos):
        role = await access.create_role(RoleCreate(name="Temporary", permissions=["CASES_VIEW"]))

        await access.delete_role(role.id)

        assert await repos.roles.get_by_id(role.id) is None
