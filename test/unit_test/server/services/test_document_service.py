"""
Unit tests for document upload, review and download.

Files are written to a temporary upload directory per test.
"""

from __future__ import annotations

import os
from unittest.mock import AsyncMock, patch

import pytest

from legal_aid.core.database.repositories.bundle import RepoBundle
from legal_aid.core.errors import InvalidTransition, NotFound, ValidationFailed
from legal_aid.core.models.domain.enums import DocumentStatus, DocumentType
from legal_aid.core.models.io.documents import DocumentReview
from legal_aid.server.core.config import StorageConfig
from legal_aid.server.services.documents import READ_CHUNK_SIZE, DocumentService, DocumentStorage, IncomingFile


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def documents(repos, upload_dir) -> DocumentService:
    return DocumentService(repos, StorageConfig(upload_dir=str(upload_dir), max_upload_size_mb=1))


def pdf(name: str = "id-card.pdf", size: int = 128) -> IncomingFile:
    return IncomingFile(filename=name, content_type="application/pdf", content=b"%" * size)


class TestDocumentStorage:
    def test_sanitize_strips_directories(self):
        assert DocumentStorage.sanitize_filename("../../etc/passwd") == "etc_passwd"

    def test_sanitize_replaces_unsafe_characters(self):
        assert DocumentStorage.sanitize_filename("my file (1).pdf") == "my_file_1.pdf"

    @pytest.mark.parametrize("name", ["", "..", "///"])
    def test_sanitize_falls_back_for_empty_names(self, name):
        assert DocumentStorage.sanitize_filename(name) == "unnamed_file"

    def test_save_and_delete(self, tmp_path):
        storage = DocumentStorage(str(tmp_path / "docs"))

        path = storage.save("a.txt", b"hello")

        assert storage.exists(path)
        assert os.path.basename(path).endswith("-a.txt")
        assert storage.delete(path) is True
        assert storage.delete(path) is False


class ChunkedUpload:
    """Upload stand-in that streams ``total`` bytes and records how much was read."""

    def __init__(self, total: int, size=None, filename: str = "scan.pdf") -> None:
        self.filename = filename
        self.content_type = "application/pdf"
        self.size = size
        self.remaining = total
        self.bytes_read = 0

    async def read(self, size: int = -1) -> bytes:
        n = self.remaining if size < 0 else min(size, self.remaining)
        self.remaining -= n
        self.bytes_read += n
        return b"%" * n


class TestReceive:
    @pytest.mark.asyncio
    async def test_reads_small_upload(self, documents):
        incoming = await documents.receive(ChunkedUpload(total=200 * 1024))

        assert incoming.filename == "scan.pdf"
        assert incoming.content_type == "application/pdf"
        assert len(incoming.content) == 200 * 1024

    @pytest.mark.asyncio
    async def test_oversized_stream_stops_at_limit(self, documents):
        upload = ChunkedUpload(total=50 * 1024 * 1024)

        with pytest.raises(ValidationFailed, match="exceeds the 1 MB limit"):
            await documents.receive(upload)

        assert upload.bytes_read <= 1024 * 1024 + READ_CHUNK_SIZE
        assert upload.remaining > 0

    @pytest.mark.asyncio
    async def test_declared_size_is_rejected_without_reading(self, documents):
        upload = ChunkedUpload(total=2 * 1024 * 1024, size=2 * 1024 * 1024)

        with pytest.raises(ValidationFailed, match="exceeds"):
            await documents.receive(upload)

        assert upload.bytes_read == 0


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_stores_files_as_pending(self, documents, factory, upload_dir):
        client = await factory.client(await factory.office(), kebele="Kebele 09")

        stored = await documents.upload(client, [pdf(), pdf("income.pdf")], document_type=DocumentType.INCOME_PROOF)

        assert [d.status for d in stored] == [DocumentStatus.PENDING.value] * 2
        assert {d.kebele for d in stored} == {"Kebele 09"}
        assert stored[0].document_type == DocumentType.INCOME_PROOF.value
        assert stored[0].file_size == 128
        assert all(os.path.isfile(d.file_path) for d in stored)
        assert len(os.listdir(upload_dir)) == 2

    @pytest.mark.asyncio
    async def test_oversized_file_is_rejected_before_writing(self, documents, factory, upload_dir):
        client = await factory.client(await factory.office())

        with pytest.raises(ValidationFailed, match="exceeds the 1 MB limit"):
            await documents.upload(client, [pdf(), pdf("scan.pdf", size=1024 * 1024 + 1)])

        assert not upload_dir.exists()

    @pytest.mark.asyncio
    async def test_kebele_is_required(self, documents, factory):
        client = await factory.client(await factory.office(), kebele=None)

        with pytest.raises(ValidationFailed, match="kebele"):
            await documents.upload(client, [pdf()])

    @pytest.mark.asyncio
    async def test_empty_upload_is_rejected(self, documents, factory):
        client = await factory.client(await factory.office())

        with pytest.raises(ValidationFailed, match="No files"):
            await documents.upload(client, [])

    @pytest.mark.asyncio
    async def test_upload_to_foreign_case_is_not_found(self, documents, factory):
        office = await factory.office()
        owner = await factory.client(office)
        other = await factory.client(office)
        case = await factory.case(office, client=owner)

        with pytest.raises(NotFound):
            await documents.upload(other, [pdf()], case_id=case.id)

    @pytest.mark.asyncio
    async def test_upload_to_own_case_is_logged(self, documents, repos, factory):
        office = await factory.office()
        client = await factory.client(office)
        case = await factory.case(office, client=client)

        await documents.upload(client, [pdf()], case_id=case.id)

        activities = await repos.case_activities.list_for_case(case.id)
        assert activities[-1].activity_type == "DOCUMENT_UPLOAD"

    @pytest.mark.asyncio
    async def test_failed_commit_removes_written_files(self, documents, factory, upload_dir):
        client = await factory.client(await factory.office())

        with patch.object(RepoBundle, "commit", new=AsyncMock(side_effect=RuntimeError("database unavailable"))):
            with pytest.raises(RuntimeError, match="database unavailable"):
                await documents.upload(client, [pdf(), pdf("second.pdf")])

        assert os.listdir(upload_dir) == []


class TestReview:
    @pytest.mark.asyncio
    async def test_coordinator_approves_office_document(self, documents, repos, factory):
        office = await factory.office()
        coordinator = await factory.coordinator(office)
        client = await factory.client(office)
        [document] = await documents.upload(client, [pdf()])

        reviewed = await documents.review(
            coordinator, document.id, DocumentReview(status=DocumentStatus.APPROVED, notes="Verified")
        )

        assert reviewed.status == DocumentStatus.APPROVED.value
        assert reviewed.reviewed_by_id == coordinator.id
        assert reviewed.reviewed_at is not None
        notifications = await repos.notifications.list_for_user(client.id)
        assert "approved" in notifications[0].message
        assert "Verified" in notifications[0].message

    @pytest.mark.asyncio
    async def test_coordinator_of_other_office_cannot_review(self, documents, factory):
        client = await factory.client(await factory.office())
        outsider = await factory.coordinator(await factory.office())
        [document] = await documents.upload(client, [pdf()])

        with pytest.raises(NotFound, match="your office"):
            await documents.review(outsider, document.id, DocumentReview(status=DocumentStatus.REJECTED))

    @pytest.mark.asyncio
    async def test_approved_document_is_final(self, documents, factory):
        admin = await factory.admin()
        client = await factory.client(await factory.office())
        [document] = await documents.upload(client, [pdf()])
        await documents.review(admin, document.id, DocumentReview(status=DocumentStatus.APPROVED))

        with pytest.raises(InvalidTransition):
            await documents.review(admin, document.id, DocumentReview(status=DocumentStatus.REJECTED))


class TestDownload:
    @pytest.mark.asyncio
    async def test_owner_and_admin_can_download(self, documents, factory):
        client = await factory.client(await factory.office())
        admin = await factory.admin()
        [document] = await documents.upload(client, [pdf()])

        assert (await documents.for_download(client, document.id)).id == document.id
        assert (await documents.for_download(admin, document.id)).id == document.id

    @pytest.mark.asyncio
    async def test_assigned_lawyer_can_download_case_document(self, documents, factory):
        office = await factory.office()
        client = await factory.client(office)
        lawyer = await factory.lawyer(office)
        case = await factory.case(office, client=client, lawyer_id=lawyer.id)
        [document] = await documents.upload(client, [pdf()], case_id=case.id)

        assert (await documents.for_download(lawyer, document.id)).id == document.id

    @pytest.mark.asyncio
    async def test_other_client_cannot_download(self, documents, factory):
        office = await factory.office()
        owner = await factory.client(office)
        other = await factory.client(office)
        [document] = await documents.upload(owner, [pdf()])

        with pytest.raises(NotFound):
            await documents.for_download(other, document.id)

    @pytest.mark.asyncio
    async def test_missing_file_is_not_found(self, documents, factory):
        client = await factory.client(await factory.office())
        [document] = await documents.upload(client, [pdf()])
        os.remove(document.file_path)

        with pytest.raises(NotFound, match="missing"):
            await documents.for_download(client, document.id)
