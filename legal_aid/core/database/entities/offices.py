"""
Office and kebele entity models.

Offices are the tenants of the platform: every case, coordinator and lawyer
belongs to exactly one office. Kebeles are the sub-district administrations a
kebele manager looks after.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class Office(Base, table=True):
    """Legal aid office.

    Table: offices
    """

    __tablename__ = "offices"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=128, unique=True, index=True)
    location: str = Field(max_length=255)
    region: Optional[str] = Field(default=None, max_length=128)
    address: Optional[str] = Field(default=None, max_length=255)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=32)
    capacity: int = Field(default=100)
    status: str = Field(default="ACTIVE", max_length=32, index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Office(id={self.id}, name={self.name}, status={self.status})"


class Kebele(Base, table=True):
    """Kebele (sub-district) administration.

    Table: kebeles
    """

    __tablename__ = "kebeles"

    id: Optional[int] = Field(default=None, primary_key=True)
    kebele_name: str = Field(max_length=128, index=True)
    kebele_number: str = Field(max_length=32, unique=True)
    sub_city: Optional[str] = Field(default=None, max_length=128)
    district: Optional[str] = Field(default=None, max_length=128)
    region: Optional[str] = Field(default=None, max_length=128)
    office_id: Optional[int] = Field(default=None, foreign_key="offices.id", index=True)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class KebeleManager(Base, table=True):
    """Link between a KEBELE_MANAGER user and the kebele they manage.

    Table: kebele_managers
    """

    __tablename__ = "kebele_managers"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True)
    kebele_id: int = Field(foreign_key="kebeles.id", index=True)
    position: Optional[str] = Field(default=None, max_length=128)

    created_at: datetime = Field(default_factory=utc_now)
