"""
User and profile I/O models.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from legal_aid.core.models.domain.enums import (
    CaseCategory,
    CoordinatorType,
    Gender,
    UserRole,
    UserStatus,
)


class UserRead(BaseModel):
    """Schema for reading a user account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    phone: Optional[str] = None
    full_name: str
    role: UserRole
    status: UserStatus
    is_admin: bool = False
    role_id: Optional[int] = None
    last_login_at: Optional[datetime] = None
    created_at: datetime


class ClientProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    office_id: Optional[int] = None
    age: Optional[int] = None
    gender: Optional[Gender] = None
    phone: Optional[str] = None
    region: Optional[str] = None
    zone: Optional[str] = None
    wereda: Optional[str] = None
    kebele: Optional[str] = None
    house_number: Optional[str] = None
    monthly_income: Optional[float] = None
    is_disabled: bool = False


class ClientProfileUpdate(BaseModel):
    """Schema for a client editing their own profile."""

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    age: Optional[int] = Field(default=None, ge=0, le=130)
    gender: Optional[Gender] = None
    phone: Optional[str] = Field(default=None, max_length=32)
    region: Optional[str] = None
    zone: Optional[str] = None
    wereda: Optional[str] = None
    kebele: Optional[str] = None
    house_number: Optional[str] = None
    monthly_income: Optional[float] = Field(default=None, ge=0)
    is_disabled: Optional[bool] = None


class LawyerProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    office_id: int
    specializations: List[str] = Field(default_factory=list)
    experience_years: int = 0
    license_number: Optional[str] = None
    max_caseload: int
    current_caseload: int
    is_available: bool
    rating: Optional[float] = None

    @field_validator("specializations", mode="before")
    @classmethod
    def _parse_specializations(cls, value):
        if isinstance(value, str):
            try:
                return json.loads(value) if value else []
            except json.JSONDecodeError:
                return []
        return value


class CoordinatorProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    office_id: int
    coordinator_type: CoordinatorType
    status: str
    qualifications: Optional[str] = None


class CurrentUserRead(BaseModel):
    """The logged-in user with the profile of their role, if any."""

    user: UserRead
    client_profile: Optional[ClientProfileRead] = None
    lawyer_profile: Optional[LawyerProfileRead] = None
    coordinator_profile: Optional[CoordinatorProfileRead] = None
    kebele_id: Optional[int] = None


class StaffCreate(BaseModel):
    """Schema for an admin creating a staff account."""

    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = Field(default=None, max_length=32)
    full_name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8, max_length=128)
    role: UserRole
    office_id: Optional[int] = Field(default=None, description="Required for lawyers and coordinators")

    specializations: List[CaseCategory] = Field(default_factory=list)
    experience_years: int = Field(default=0, ge=0)
    license_number: Optional[str] = None
    max_caseload: int = Field(default=20, ge=1)

    coordinator_type: CoordinatorType = CoordinatorType.PERMANENT
    qualifications: Optional[str] = None

    kebele_id: Optional[int] = Field(default=None, description="Required for kebele managers")
    position: Optional[str] = Field(default=None, max_length=128)


class LawyerProfileUpdate(BaseModel):
    specializations: Optional[List[CaseCategory]] = None
    experience_years: Optional[int] = Field(default=None, ge=0)
    license_number: Optional[str] = None
    max_caseload: Optional[int] = Field(default=None, ge=1)
    is_available: Optional[bool] = None
    office_id: Optional[int] = None


class UserStatusUpdate(BaseModel):
    status: UserStatus


class UserRoleUpdate(BaseModel):
    role_id: Optional[int] = Field(default=None, description="Custom role id, or null to clear")
