"""Document endpoints — every create or content edit re-ingests the document."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from applihero.application.schemas import DocumentCreate, DocumentResponse, DocumentUpdate
from applihero.application.services import DocumentService
from applihero.domain.entities import JobDocument
from applihero.domain.exceptions import EmbeddingProviderError, EntityNotFoundError
from applihero.infrastructure.dependencies import get_document_service
from applihero.presentation.api.v1.endpoints.errors import upstream_error

router = APIRouter(prefix="/documents", tags=["Documents"])


def _to_response(document: JobDocument, chunks: int | None = None) -> DocumentResponse:
    response = DocumentResponse.model_validate(document, from_attributes=True)
    return response.model_copy(update={"chunks": chunks})


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    user_id: str = Query(..., min_length=1),
    job_id: str | None = None,
    service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    """List a user's documents, optionally only those of one job."""
    documents = await service.list_documents(user_id, job_id=job_id)
    return [_to_response(d) for d in documents]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    user_id: str = Query(..., min_length=1),
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    try:
        document = await service.get_document(document_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _to_response(document)


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    data: DocumentCreate,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Store a pasted document and ingest it."""
    try:
        document, chunks = await service.create_document(data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EmbeddingProviderError as e:
        raise upstream_error(e)
    return _to_response(document, chunks)


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    data: DocumentUpdate,
    service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Edit a document; changed content replaces all of its chunks."""
    try:
        document, chunks = await service.update_document(document_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EmbeddingProviderError as e:
        raise upstream_error(e)
    return _to_response(document, chunks)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    user_id: str = Query(..., min_length=1),
    service: DocumentService = Depends(get_document_service),
) -> None:
    try:
        await service.delete_document(document_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
