"""
Document I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from legal_aid.core.models.domain.enums import DocumentStatus, DocumentType


class DocumentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    file_name: str
    file_size: int
    mime_type: Optional[str] = None
    document_type: DocumentType
    status: DocumentStatus
    uploaded_by_id: int
    case_id: Optional[int] = None
    kebele: Optional[str] = None
    reviewed_by_id: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime


class DocumentReview(BaseModel):
    status: DocumentStatus
    notes: Optional[str] = None
