"""
Office and kebele I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from legal_aid.core.models.domain.enums import OfficeStatus

from .cases import CaseRead


class OfficeBase(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    location: str = Field(min_length=1, max_length=255)
    region: Optional[str] = None
    address: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    capacity: int = Field(default=100, ge=1)
    status: OfficeStatus = OfficeStatus.ACTIVE


class OfficeCreate(OfficeBase):
    pass


class OfficeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    location: Optional[str] = None
    region: Optional[str] = None
    address: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    status: Optional[OfficeStatus] = None


class OfficeRead(OfficeBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


class KebeleManagerCreate(BaseModel):
    full_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: Optional[str] = None
    password: str = Field(min_length=8, max_length=128)
    position: Optional[str] = None


class KebeleBase(BaseModel):
    kebele_name: str = Field(min_length=1, max_length=128)
    kebele_number: str = Field(min_length=1, max_length=32)
    sub_city: Optional[str] = None
    district: Optional[str] = None
    region: Optional[str] = None
    office_id: Optional[int] = None


class KebeleCreate(KebeleBase):
    manager: Optional[KebeleManagerCreate] = None


class KebeleUpdate(BaseModel):
    kebele_name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    sub_city: Optional[str] = None
    district: Optional[str] = None
    region: Optional[str] = None
    office_id: Optional[int] = None
    is_active: Optional[bool] = None


class KebeleManagerRead(BaseModel):
    user_id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    position: Optional[str] = None


class KebeleRead(KebeleBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    is_active: bool
    created_at: datetime
    manager: Optional[KebeleManagerRead] = None


class KebeleDashboard(BaseModel):
    kebele: KebeleRead
    total_cases: int
    cases_by_status: Dict[str, int]
    recent_cases: List[CaseRead]
