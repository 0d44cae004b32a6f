"""
Document entity model.

Stores the metadata of an uploaded file; the bytes live on disk under the
configured upload directory.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Text

from ..base import Base, utc_now


class Document(Base, table=True):
    """Uploaded document awaiting or past verification.

    Table: documents
    """

    __tablename__ = "documents"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    file_name: str = Field(max_length=255)
    file_path: str = Field(max_length=512)
    file_size: int = Field(default=0)
    mime_type: Optional[str] = Field(default=None, max_length=128)
    document_type: str = Field(default="APPLICATION", max_length=32)
    status: str = Field(default="PENDING", max_length=32, index=True)

    uploaded_by_id: int = Field(foreign_key="users.id", index=True)
    case_id: Optional[int] = Field(default=None, foreign_key="cases.id", index=True)
    kebele: Optional[str] = Field(default=None, max_length=128)

    reviewed_by_id: Optional[int] = Field(default=None, foreign_key="users.id")
    reviewed_at: Optional[datetime] = Field(default=None)
    notes: Optional[str] = Field(default=None, sa_type=Text)

    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})
