"""
User and profile entity models.

A ``User`` row carries credentials and the built-in role. Role specific data
lives in one profile table per role, keyed by ``user_id``.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import List, Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class User(Base, table=True):
    """Account of any role.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    phone: Optional[str] = Field(default=None, max_length=32, unique=True)
    full_name: str = Field(max_length=255)
    password_hash: str = Field(max_length=255)

    role: str = Field(max_length=32, index=True)
    status: str = Field(default="ACTIVE", max_length=32, index=True)
    is_admin: bool = Field(default=False)
    role_id: Optional[int] = Field(default=None, foreign_key="roles.id", index=True)

    last_login_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class ClientProfile(Base, table=True):
    """Intake data of a CLIENT user.

    Table: client_profiles
    """

    __tablename__ = "client_profiles"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True)
    office_id: Optional[int] = Field(default=None, foreign_key="offices.id", index=True)

    age: Optional[int] = Field(default=None)
    gender: Optional[str] = Field(default=None, max_length=16)
    phone: Optional[str] = Field(default=None, max_length=32)
    region: Optional[str] = Field(default=None, max_length=128)
    zone: Optional[str] = Field(default=None, max_length=128)
    wereda: Optional[str] = Field(default=None, max_length=128)
    kebele: Optional[str] = Field(default=None, max_length=128, index=True)
    house_number: Optional[str] = Field(default=None, max_length=32)
    monthly_income: Optional[float] = Field(default=None)
    is_disabled: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class LawyerProfile(Base, table=True):
    """Professional data and caseload of a LAWYER user.

    Table: lawyer_profiles
    """

    __tablename__ = "lawyer_profiles"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True)
    office_id: int = Field(foreign_key="offices.id", index=True)

    specializations: str = Field(default="[]", sa_type=Text, description="JSON array of case categories")
    experience_years: int = Field(default=0)
    license_number: Optional[str] = Field(default=None, max_length=64)
    max_caseload: int = Field(default=20)
    current_caseload: int = Field(default=0)
    is_available: bool = Field(default=True)
    rating: Optional[float] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def get_specializations_list(self) -> List[str]:
        """Get specializations as a list."""
        try:
            return json.loads(self.specializations) if self.specializations else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_specializations_list(self, specializations: List[str]) -> None:
        """Set specializations from a list."""
        self.specializations = json.dumps(specializations)

    @property
    def has_capacity(self) -> bool:
        return self.current_caseload < self.max_caseload


class CoordinatorProfile(Base, table=True):
    """Office membership of a COORDINATOR user.

    Table: coordinator_profiles
    """

    __tablename__ = "coordinator_profiles"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True)
    office_id: int = Field(foreign_key="offices.id", index=True)
    coordinator_type: str = Field(default="PERMANENT", max_length=32)
    status: str = Field(default="ACTIVE", max_length=32, index=True)
    qualifications: Optional[str] = Field(default=None, sa_type=Text)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class AuthSession(Base, table=True):
    """Server side record of an issued access token.

    Table: auth_sessions
    """

    __tablename__ = "auth_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    token: str = Field(max_length=1024, unique=True, index=True)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    is_active: bool = Field(default=True)
    expires_at: datetime = Field(index=True)
    last_used_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
