"""Retrieval endpoint — semantic search over the user's document chunks."""

from fastapi import APIRouter, Depends, HTTPException, status

from applihero.application.schemas import (
    RetrievalSearchRequest,
    RetrievalSearchResponse,
    RetrievedChunkSchema,
)
from applihero.application.services import RetrievalService, assemble_context
from applihero.domain.exceptions import EmbeddingProviderError, InvalidRequestError
from applihero.infrastructure.dependencies import get_retrieval_service
from applihero.presentation.api.v1.endpoints.errors import upstream_error

router = APIRouter(prefix="/retrieval", tags=["Retrieval"])


@router.post("/search", response_model=RetrievalSearchResponse)
async def search(
    request: RetrievalSearchRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> RetrievalSearchResponse:
    """Return the chunks most similar to the query, best first.

    An empty ``results`` list means nothing relevant was found.
    """
    try:
        results = await service.retrieve(
            request.query,
            user_id=request.user_id,
            job_id=request.job_id,
            limit=request.limit,
            min_similarity=request.min_similarity,
        )
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EmbeddingProviderError as e:
        raise upstream_error(e)

    return RetrievalSearchResponse(
        results=[
            RetrievedChunkSchema(
                document_id=r.chunk.document_id,
                job_id=r.chunk.job_id,
                chunk_index=r.chunk.chunk_index,
                content=r.content,
                similarity=r.similarity,
            )
            for r in results
        ],
        context=assemble_context(results, service.context_max_chars),
        scope=service.scope.value,
    )
