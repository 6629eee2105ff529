"""Job CRUD endpoints plus RAG ingestion of a job's documents."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from applihero.application.schemas import (
    JobCreate,
    JobIngestionReport,
    JobIngestRequest,
    JobResponse,
    JobUpdate,
)
from applihero.application.services import JobService
from applihero.domain.exceptions import (
    EmbeddingProviderError,
    EntityNotFoundError,
)
from applihero.infrastructure.dependencies import get_job_service
from applihero.presentation.api.v1.endpoints.errors import upstream_error

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    user_id: str = Query(..., min_length=1),
    skip: int = 0,
    limit: int = 100,
    service: JobService = Depends(get_job_service),
) -> list[JobResponse]:
    """List a user's jobs, most recently updated first."""
    jobs = await service.list_jobs(user_id, skip=skip, limit=limit)
    return [JobResponse.model_validate(j, from_attributes=True) for j in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    user_id: str = Query(..., min_length=1),
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    try:
        job = await service.get_job(job_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return JobResponse.model_validate(job, from_attributes=True)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobCreate,
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    """Create a job. Call ``POST /jobs/{id}/ingest`` to make it searchable."""
    job = await service.create_job(data)
    return JobResponse.model_validate(job, from_attributes=True)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    data: JobUpdate,
    service: JobService = Depends(get_job_service),
) -> JobResponse:
    """Update a job; a changed description is re-ingested."""
    try:
        job = await service.update_job(job_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except EmbeddingProviderError as e:
        raise upstream_error(e)
    return JobResponse.model_validate(job, from_attributes=True)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: str,
    user_id: str = Query(..., min_length=1),
    service: JobService = Depends(get_job_service),
) -> None:
    """Delete a job with its documents, chunks, questions and chat history."""
    try:
        await service.delete_job(job_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{job_id}/ingest", response_model=JobIngestionReport)
async def ingest_job(
    job_id: str,
    data: JobIngestRequest,
    service: JobService = Depends(get_job_service),
) -> JobIngestionReport:
    """(Re)ingest the job description and the user's global documents.

    Per-document failures are reported in the response body, not as an error.
    """
    try:
        return await service.ingest_job(job_id, data.user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
