"""
Billing entity models.

Service packages are priced offerings, service requests are what a client
orders, and payments record each attempt to pay for a request.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class ServicePackage(Base, table=True):
    """Priced legal service offering.

    Table: service_packages
    """

    __tablename__ = "service_packages"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=128, unique=True)
    description: Optional[str] = Field(default=None, sa_type=Text)
    price: float = Field(default=0.0)
    currency: str = Field(default="ETB", max_length=8)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class ServiceRequest(Base, table=True):
    """Client order for a paid service.

    Table: service_requests
    """

    __tablename__ = "service_requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="users.id", index=True)
    package_id: Optional[int] = Field(default=None, foreign_key="service_packages.id")
    title: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    status: str = Field(default="PENDING", max_length=32, index=True)
    payment_status: str = Field(default="PENDING", max_length=32, index=True)
    quoted_price: Optional[float] = Field(default=None)
    assigned_lawyer_id: Optional[int] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})


class Payment(Base, table=True):
    """Payment attempt for a service request.

    Table: payments
    """

    __tablename__ = "payments"

    id: Optional[int] = Field(default=None, primary_key=True)
    service_request_id: int = Field(foreign_key="service_requests.id", index=True)
    client_id: int = Field(foreign_key="users.id", index=True)
    amount: float
    currency: str = Field(default="ETB", max_length=8)
    method: str = Field(default="CHAPA", max_length=32)
    status: str = Field(default="PENDING", max_length=32, index=True)
    tx_ref: str = Field(max_length=64, unique=True, index=True)
    checkout_url: Optional[str] = Field(default=None, max_length=1024)
    provider_reference: Optional[str] = Field(default=None, max_length=128)
    paid_at: Optional[datetime] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})
