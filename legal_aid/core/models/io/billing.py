"""
Billing I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from legal_aid.core.models.domain.enums import PaymentMethod, PaymentStatus, ServiceRequestStatus


class PackageCreate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: Optional[str] = None
    price: float = Field(ge=0)
    currency: str = Field(default="ETB", max_length=8)
    is_active: bool = True


class PackageUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class PackageRead(PackageCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


class ServiceRequestCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    package_id: Optional[int] = None


class ServiceRequestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    client_id: int
    package_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    status: ServiceRequestStatus
    payment_status: PaymentStatus
    quoted_price: Optional[float] = None
    assigned_lawyer_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ServiceRequestStatusUpdate(BaseModel):
    status: ServiceRequestStatus
    assigned_lawyer_id: Optional[int] = None


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus
    note: Optional[str] = None


class ChapaInitializeRequest(BaseModel):
    amount: float = Field(gt=0)
    email: str = Field(min_length=3, max_length=255)
    service_request_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    tx_ref: Optional[str] = Field(default=None, max_length=64)
    currency: str = "ETB"


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    service_request_id: int
    client_id: int
    amount: float
    currency: str
    method: PaymentMethod
    status: PaymentStatus
    tx_ref: str
    checkout_url: Optional[str] = None
    provider_reference: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime


class ChapaInitializeResponse(BaseModel):
    checkout_url: str
    tx_ref: str
    payment: PaymentRead
