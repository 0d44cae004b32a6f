"""
Access control entity models.

Custom roles group named permissions. System roles mirror the built-in
``UserRole`` values and cannot be edited or removed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Role(Base, table=True):
    """Named group of permissions.

    Table: roles
    """

    __tablename__ = "roles"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=64, unique=True, index=True)
    description: Optional[str] = Field(default=None, sa_type=Text)
    is_system_role: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class Permission(Base, table=True):
    """Single permission such as ``CASES_ASSIGN``.

    Table: permissions
    """

    __tablename__ = "permissions"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=64, unique=True, index=True)
    module: str = Field(max_length=32)
    action: str = Field(max_length=32)
    description: Optional[str] = Field(default=None, max_length=255)


class RolePermission(Base, table=True):
    """Role to permission link.

    Table: role_permissions
    """

    __tablename__ = "role_permissions"

    role_id: int = Field(foreign_key="roles.id", primary_key=True)
    permission_id: int = Field(foreign_key="permissions.id", primary_key=True)
