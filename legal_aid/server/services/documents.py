"""
Document service.

Uploaded files are written to the configured upload directory as
``{uuid}-{secure name}`` and described by a ``Document`` row. Disk writes
happen before the commit; if the commit fails the written files are removed.
"""

from __future__ import annotations

import asyncio
import os
import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence

from fastapi import UploadFile
from werkzeug.utils import secure_filename

from legal_aid.core.database.base import utc_now
from legal_aid.core.database.entities.documents import Document
from legal_aid.core.database.entities.users import User
from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import Forbidden, NotFound, ValidationFailed
from legal_aid.core.logging_config import get_logger
from legal_aid.core.models.domain.enums import (
    CaseActivityType,
    DocumentStatus,
    DocumentType,
    NotificationType,
    UserRole,
)
from legal_aid.core.models.domain.transitions import DOCUMENT_TRANSITIONS, ensure_transition
from legal_aid.core.models.io.documents import DocumentReview
from legal_aid.server.core.config import StorageConfig

from .assignment import CaseAssigner
from .notifications import NotificationService

logger = get_logger(__name__)

READ_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class IncomingFile:
    """A file received from a multipart request."""

    filename: str
    content_type: Optional[str]
    content: bytes


class DocumentStorage:
    """Disk I/O for uploaded documents. Synchronous; no database access."""

    def __init__(self, upload_dir: str) -> None:
        self.upload_dir = upload_dir

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        return secure_filename(filename or "") or "unnamed_file"

    def save(self, filename: str, content: bytes) -> str:
        os.makedirs(self.upload_dir, exist_ok=True)
        path = os.path.join(self.upload_dir, f"{uuid.uuid4()}-{self.sanitize_filename(filename)}")
        with open(path, "wb") as f:
            f.write(content)
        logger.debug(f"Saved document {path} ({len(content)} bytes)")
        return path

    def delete(self, path: str) -> bool:
        if not os.path.exists(path):
            logger.warning(f"Document not found for deletion: {path}")
            return False
        os.remove(path)
        return True

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)


class DocumentService:
    def __init__(self, repos: RepoBundle, config: StorageConfig, storage: Optional[DocumentStorage] = None) -> None:
        self.repos = repos
        self.max_bytes = config.max_upload_size_mb * 1024 * 1024
        self.storage = storage or DocumentStorage(config.upload_dir)
        self.notifications = NotificationService(repos)
        self.assigner = CaseAssigner(repos, self.notifications)

    def _too_large(self, filename: str) -> ValidationFailed:
        return ValidationFailed(f"File {filename} exceeds the {self.max_bytes // (1024 * 1024)} MB limit")

    async def receive(self, upload: UploadFile) -> IncomingFile:
        """Read a multipart upload, stopping as soon as it passes the size limit.

        Raises:
            ValidationFailed: The declared or streamed size is over the limit.
        """
        filename = upload.filename or "unnamed_file"
        if upload.size is not None and upload.size > self.max_bytes:
            raise self._too_large(filename)
        chunks: List[bytes] = []
        received = 0
        while True:
            chunk = await upload.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            received += len(chunk)
            if received > self.max_bytes:
                raise self._too_large(filename)
            chunks.append(chunk)
        return IncomingFile(filename=filename, content_type=upload.content_type, content=b"".join(chunks))

    async def upload(
        self,
        client: User,
        files: Sequence[IncomingFile],
        *,
        document_type: DocumentType = DocumentType.APPLICATION,
        title: Optional[str] = None,
        case_id: Optional[int] = None,
    ) -> List[Document]:
        """Store the files of a client and record them as PENDING documents.

        Raises:
            ValidationFailed: No files, a file over the size limit, or a client
                profile without a kebele.
            NotFound: ``case_id`` is not one of the client's cases.
        """
        if not files:
            raise ValidationFailed("No files provided")
        profile = await self.repos.clients.get_by_user(client.id)
        if profile is None:
            raise ValidationFailed("User profile not found")
        if not profile.kebele:
            raise ValidationFailed("Client kebele is required for document upload")
        for incoming in files:
            if len(incoming.content) > self.max_bytes:
                raise self._too_large(incoming.filename)
        if case_id is not None:
            case = await self.repos.cases.get_by_id(case_id)
            if case is None or case.client_id != client.id:
                raise NotFound("Case not found")

        saved_paths: List[str] = []
        documents: List[Document] = []
        try:
            for incoming in files:
                path = await asyncio.to_thread(self.storage.save, incoming.filename, incoming.content)
                saved_paths.append(path)
                documents.append(
                    await self.repos.documents.add(
                        Document(
                            title=title or incoming.filename,
                            file_name=incoming.filename,
                            file_path=path,
                            file_size=len(incoming.content),
                            mime_type=incoming.content_type,
                            document_type=document_type.value,
                            status=DocumentStatus.PENDING.value,
                            uploaded_by_id=client.id,
                            case_id=case_id,
                            kebele=profile.kebele,
                        )
                    )
                )
            if case_id is not None:
                await self.assigner.record_activity(
                    case_id,
                    CaseActivityType.DOCUMENT_UPLOAD,
                    f"{len(documents)} document(s) uploaded",
                    user_id=client.id,
                    description=", ".join(document.file_name for document in documents),
                )
            await self.repos.commit()
        except Exception:
            await self.repos.rollback()
            for path in saved_paths:
                await asyncio.to_thread(self.storage.delete, path)
            raise

        logger.info(f"Client {client.id} uploaded {len(documents)} document(s)")
        return documents

    async def list_for_client(self, client: User, status: Optional[DocumentStatus] = None) -> List[Document]:
        return await self.repos.documents.list_for_uploader(client.id, status.value if status else None)

    async def list_for_coordinator(self, coordinator: User, status: Optional[DocumentStatus] = None) -> List[Document]:
        profile = await self.repos.coordinators.get_by_user(coordinator.id)
        if profile is None:
            raise Forbidden("Coordinator profile not found")
        return await self.repos.documents.list_for_office(profile.office_id, status.value if status else None)

    async def list_all(self, status: Optional[DocumentStatus] = None) -> List[Document]:
        return await self.repos.documents.list(filters={"status": status})

    async def _reviewable(self, reviewer: User, document_id: int) -> Document:
        document = await self.repos.documents.get_by_id(document_id)
        if document is None:
            raise NotFound("Document not found")
        if reviewer.role == UserRole.COORDINATOR.value:
            profile = await self.repos.coordinators.get_by_user(reviewer.id)
            uploader = await self.repos.clients.get_by_user(document.uploaded_by_id)
            if profile is None or uploader is None or uploader.office_id != profile.office_id:
                raise NotFound("Document not found in your office")
        return document

    async def review(self, reviewer: User, document_id: int, payload: DocumentReview) -> Document:
        """Approve or reject a document (or send a rejected one back to PENDING)."""
        document = await self._reviewable(reviewer, document_id)
        ensure_transition(DOCUMENT_TRANSITIONS, DocumentStatus(document.status), payload.status)

        document.status = payload.status.value
        document.reviewed_by_id = reviewer.id
        document.reviewed_at = utc_now()
        document.updated_at = utc_now()
        if payload.notes is not None:
            document.notes = payload.notes
        self.repos.session.add(document)
        await self.notifications.notify(
            document.uploaded_by_id,
            "Document reviewed",
            f"Your document '{document.title}' was {payload.status.value.lower()}."
            + (f" Notes: {payload.notes}" if payload.notes else ""),
            type=NotificationType.DOCUMENT_REVIEW,
        )
        await self.repos.commit()
        return document

    async def for_download(self, user: User, document_id: int) -> Document:
        """Return a document the user may read whose file is still on disk."""
        document = await self.repos.documents.get_by_id(document_id)
        if document is None:
            raise NotFound("Document not found")

        allowed = document.uploaded_by_id == user.id or user.role in (
            UserRole.ADMIN.value,
            UserRole.SUPER_ADMIN.value,
        )
        if not allowed and user.role == UserRole.COORDINATOR.value:
            await self._reviewable(user, document_id)
            allowed = True
        if not allowed and user.role == UserRole.LAWYER.value and document.case_id is not None:
            case = await self.repos.cases.get_by_id(document.case_id)
            allowed = case is not None and case.lawyer_id == user.id
        if not allowed:
            raise NotFound("Document not found")
        if not await asyncio.to_thread(self.storage.exists, document.file_path):
            raise NotFound("Document file is missing")
        return document
