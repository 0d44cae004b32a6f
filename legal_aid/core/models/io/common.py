"""
Response envelopes shared by every endpoint.

Successful responses are wrapped as ``{"success": true, "message": ..., "data": ...}``;
errors use the same keys with ``success`` false and no ``data``.
"""

from __future__ import annotations

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    success: bool = False
    message: str
    errors: Optional[list] = None


class Page(BaseModel, Generic[T]):
    """One page of a paginated listing."""

    items: List[T]
    total: int
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total_pages: int

    @classmethod
    def build(cls, items: List[T], total: int, page: int, limit: int) -> "Page[T]":
        return cls(items=items, total=total, page=page, limit=limit, total_pages=math.ceil(total / limit) if limit else 0)


def ok(data: Optional[T] = None, message: Optional[str] = None) -> ApiResponse[T]:
    return ApiResponse(success=True, message=message, data=data)
