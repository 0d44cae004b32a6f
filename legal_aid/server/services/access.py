"""
Access control service.

Manages custom roles and the permission catalogue. The six built-in roles are
seeded as system roles and cannot be edited or deleted; custom roles are
linked to users through ``User.role_id``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from legal_aid.core.database.entities.access import Permission, Role
from legal_aid.core.database.entities.users import User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import UserRole, UserStatus
from legal_aid.core.models.domain.permissions import (
    DEFAULT_PERMISSIONS,
    SYSTEM_ROLE_DESCRIPTIONS,
    SYSTEM_ROLE_PERMISSIONS,
)
from legal_aid.core.models.io.access import RoleCreate, RoleRead, RoleUpdate
from legal_aid.core.security import hash_password

logger = get_logger(__name__)


class AccessService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def seed_defaults(self) -> None:
        """Create missing permissions and system roles. Safe to run on every startup."""
        existing = {p.name for p in await self.repos.permissions.list_ordered()}
        for spec in DEFAULT_PERMISSIONS:
            if spec.name not in existing:
                self.repos.session.add(
                    Permission(
                        name=spec.name,
                        module=spec.module.value,
                        action=spec.action.value,
                        description=spec.description,
                    )
                )
        await self.repos.session.flush()

        catalogue = await self.repos.permissions.get_by_names([spec.name for spec in DEFAULT_PERMISSIONS])
        for role_name, permission_names in SYSTEM_ROLE_PERMISSIONS.items():
            role = await self.repos.roles.get_by_name(role_name.value)
            if role is not None:
                continue
            role = await self.repos.roles.add(
                Role(
                    name=role_name.value,
                    description=SYSTEM_ROLE_DESCRIPTIONS.get(role_name),
                    is_system_role=True,
                )
            )
            await self.repos.roles.replace_permissions(role.id, [catalogue[name].id for name in permission_names])
            logger.info(f"Seeded system role {role.name}")
        await self.repos.commit()

    async def ensure_bootstrap_admin(self, email: Optional[str], password: Optional[str]) -> Optional[User]:
        """Create the first SUPER_ADMIN account when configured and missing."""
        if not email or not password:
            return None
        user = await self.repos.users.get_by_email(email)
        if user is not None:
            return user
        user = await self.repos.users.create(
            User(
                email=email.lower(),
                full_name="System Administrator",
                password_hash=hash_password(password),
                role=UserRole.SUPER_ADMIN.value,
                status=UserStatus.ACTIVE.value,
                is_admin=True,
            )
        )
        logger.info(f"Created bootstrap administrator {user.email}")
        return user

    async def _user_count(self, role: Role) -> int:
        count = await self.repos.users.count_with_custom_role(role.id)
        if role.is_system_role:
            count += await self.repos.users.count({"role": role.name})
        return count

    async def read(self, role: Role) -> RoleRead:
        return RoleRead(
            id=role.id,
            name=role.name,
            description=role.description,
            is_system_role=role.is_system_role,
            permissions=await self.repos.roles.permission_names(role.id),
            user_count=await self._user_count(role),
            created_at=role.created_at,
        )

    async def list_roles(self) -> List[RoleRead]:
        return [await self.read(role) for role in await self.repos.roles.list_ordered()]

    async def list_permissions(self) -> List[Permission]:
        return await self.repos.permissions.list_ordered()

    async def get_role(self, role_id: int) -> Role:
        role = await self.repos.roles.get_by_id(role_id)
        if role is None:
            raise NotFound("Role not found")
        return role

    async def _resolve_permissions(self, names: Sequence[str]) -> List[int]:
        unique = list(dict.fromkeys(name.strip() for name in names if name and name.strip()))
        if not unique:
            raise ValidationFailed("At least one permission is required")
        found = await self.repos.permissions.get_by_names(unique)
        missing = [name for name in unique if name not in found]
        if missing:
            raise ValidationFailed(f"Unknown permissions: {', '.join(missing)}", details=missing)
        return [found[name].id for name in unique]

    async def _ensure_name_free(self, name: str, role_id: Optional[int] = None) -> None:
        existing = await self.repos.roles.get_by_name(name)
        if existing is not None and existing.id != role_id:
            raise ValidationFailed("Role name already exists")

    async def create_role(self, payload: RoleCreate) -> RoleRead:
        name = payload.name.strip()
        await self._ensure_name_free(name)
        permission_ids = await self._resolve_permissions(payload.permissions)

        role = await self.repos.roles.add(Role(name=name, description=payload.description, is_system_role=False))
        await self.repos.roles.replace_permissions(role.id, permission_ids)
        try:
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            raise ValidationFailed("Role name already exists") from e
        return await self.read(role)

    async def update_role(self, role_id: int, payload: RoleUpdate) -> RoleRead:
        """Rename, re-describe or replace the permissions of a custom role."""
        role = await self.get_role(role_id)
        if role.is_system_role:
            raise Forbidden("System roles cannot be modified")

        if payload.name is not None and payload.name.strip() != role.name:
            await self._ensure_name_free(payload.name.strip(), role.id)
            role.name = payload.name.strip()
        if payload.description is not None:
            role.description = payload.description
        if payload.permissions is not None:
            await self.repos.roles.replace_permissions(role.id, await self._resolve_permissions(payload.permissions))
        self.repos.session.add(role)
        try:
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            raise ValidationFailed("Role name already exists") from e
        return await self.read(role)

    async def delete_role(self, role_id: int) -> None:
        role = await self.get_role(role_id)
        if role.is_system_role:
            raise Forbidden("System roles cannot be deleted")
        if await self._user_count(role) > 0:
            raise ValidationFailed("Cannot delete role with assigned users")
        await self.repos.roles.replace_permissions(role.id, [])
        await self.repos.roles.delete(role.id)
