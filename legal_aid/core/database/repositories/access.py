"""
Access control repositories.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.access import Permission, Role, RolePermission
from .base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Repository for custom and system roles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Role)

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Case-insensitive lookup by role name."""
        stmt = select(Role).where(func.lower(Role.name) == name.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_ordered(self) -> List[Role]:
        stmt = select(Role).order_by(Role.is_system_role.desc(), Role.name.asc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def permission_names(self, role_id: int) -> List[str]:
        stmt = (
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def replace_permissions(self, role_id: int, permission_ids: Sequence[int]) -> None:
        """Swap the role's permission links (flush only)."""
        await self.session.execute(delete(RolePermission).where(RolePermission.role_id == role_id))
        for permission_id in permission_ids:
            self.session.add(RolePermission(role_id=role_id, permission_id=permission_id))
        await self.session.flush()


class PermissionRepository(BaseRepository[Permission]):
    """Repository for the permission catalogue."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Permission)

    async def list_ordered(self) -> List[Permission]:
        stmt = select(Permission).order_by(Permission.module, Permission.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_names(self, names: Sequence[str]) -> Dict[str, Permission]:
        if not names:
            return {}
        stmt = select(Permission).where(Permission.name.in_(list(names)))  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return {permission.name: permission for permission in result.scalars().all()}
