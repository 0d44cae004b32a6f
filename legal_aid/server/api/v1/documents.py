"""
Document Download Endpoint.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from legal_aid.server.services.deps import CurrentUserDep, DocumentServiceDep

router = APIRouter()


@router.get(
    "/{document_id}/download",
    response_class=FileResponse,
    summary="Download Document",
    description="Download a document you uploaded, review, or work on.",
    responses={404: {"description": "Document not found"}},
)
async def download(document_id: int, user: CurrentUserDep, documents: DocumentServiceDep):
    document = await documents.for_download(user, document_id)
    return FileResponse(document.file_path, filename=document.file_name, media_type=document.mime_type)
