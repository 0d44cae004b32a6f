"""
Document repository.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.documents import Document
from ..entities.users import ClientProfile
from .base import BaseRepository, QueryBuilder


class DocumentRepository(BaseRepository[Document]):
    """Repository for uploaded document metadata."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Document)

    async def list_for_uploader(self, user_id: int, status: Optional[str] = None) -> List[Document]:
        return await self.list(filters={"uploaded_by_id": user_id, "status": status})

    async def list_owned(self, document_ids: Sequence[int], user_id: int) -> List[Document]:
        """Documents among ``document_ids`` that ``user_id`` uploaded."""
        if not document_ids:
            return []
        stmt = select(Document).where(
            Document.id.in_(list(document_ids)),  # type: ignore[union-attr]
            Document.uploaded_by_id == user_id,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_office(self, office_id: int, status: Optional[str] = None) -> List[Document]:
        """Documents uploaded by clients registered with ``office_id``."""
        stmt = (
            select(Document)
            .join(ClientProfile, ClientProfile.user_id == Document.uploaded_by_id)
            .where(ClientProfile.office_id == office_id)
        )
        stmt = QueryBuilder.apply_filters(stmt, Document, {"status": status})
        stmt = stmt.order_by(Document.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self, uploaded_by_id: Optional[int] = None) -> Dict[str, int]:
        stmt = select(Document.status, func.count(Document.id)).group_by(Document.status)
        stmt = QueryBuilder.apply_filters(stmt, Document, {"uploaded_by_id": uploaded_by_id})
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}
