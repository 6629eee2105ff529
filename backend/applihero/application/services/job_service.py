"""Application service (use case) for jobs and their ingestion into the RAG store."""

import logging

from applihero.application.interfaces import DocumentRepository, JobRepository
from applihero.application.schemas.jobs import (
    DocumentIngestionResult,
    JobCreate,
    JobIngestionReport,
    JobUpdate,
)
from applihero.application.services.document_ingestion_service import DocumentIngestionService
from applihero.domain.entities import DocumentType, Job, JobDocument
from applihero.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


async def require_owned_job(repository: JobRepository, job_id: str, user_id: str) -> Job:
    """Load a job, hiding jobs of other users behind the same not-found error."""
    job = await repository.get_by_id(job_id)
    if job is None or job.user_id != user_id:
        raise EntityNotFoundError("Job", job_id)
    return job


class JobService:
    """Orchestrates job CRUD and keeps the job description document in sync."""

    def __init__(
        self,
        job_repository: JobRepository,
        document_repository: DocumentRepository,
        ingestion_service: DocumentIngestionService,
    ):
        self._job_repo = job_repository
        self._document_repo = document_repository
        self._ingestion = ingestion_service

    async def get_job(self, job_id: str, user_id: str) -> Job:
        return await require_owned_job(self._job_repo, job_id, user_id)

    async def list_jobs(self, user_id: str, skip: int = 0, limit: int = 100) -> list[Job]:
        return await self._job_repo.list_for_user(user_id, skip=skip, limit=limit)

    async def create_job(self, data: JobCreate) -> Job:
        job = Job(
            user_id=data.user_id,
            job_title=data.job_title,
            company_name=data.company_name,
            job_description=data.job_description,
            status=data.status,
        )
        return await self._job_repo.create(job)

    async def update_job(self, job_id: str, data: JobUpdate) -> Job:
        """Update a job; a new description is re-ingested right away."""
        job = await self.get_job(job_id, data.user_id)
        job.update(
            job_title=data.job_title,
            company_name=data.company_name,
            job_description=data.job_description,
            status=data.status,
        )
        job = await self._job_repo.update(job)

        if data.job_description is not None:
            document = await self._sync_description_document(job)
            if document is not None:
                await self._ingestion.ingest(document)
        return job

    async def delete_job(self, job_id: str, user_id: str) -> bool:
        await self.get_job(job_id, user_id)
        return await self._job_repo.delete(job_id)

    async def ingest_job(self, job_id: str, user_id: str) -> JobIngestionReport:
        """(Re)ingest the job description plus every document the job can see.

        A failing document is reported as ``failed`` and the remaining
        documents are still ingested.
        """
        job = await self.get_job(job_id, user_id)
        await self._sync_description_document(job)

        documents = await self._document_repo.list_for_user(user_id, job_id=job_id)
        documents += await self._document_repo.list_for_user(user_id, global_only=True)
        logger.info("Ingesting %d document(s) for job %s", len(documents), job_id)

        results: list[DocumentIngestionResult] = []
        for document in documents:
            try:
                chunks = await self._ingestion.ingest(document)
            except Exception as e:
                logger.error("Failed to ingest document %s (%s): %s", document.id, document.title, e)
                results.append(
                    DocumentIngestionResult(
                        document_id=document.id or "",
                        title=document.title,
                        document_type=document.document_type.value,
                        status="failed",
                        error=str(e),
                    )
                )
                continue
            results.append(
                DocumentIngestionResult(
                    document_id=document.id or "",
                    title=document.title,
                    document_type=document.document_type.value,
                    status="success",
                    chunks=chunks,
                )
            )

        return JobIngestionReport(job_id=job_id, results=results, total_documents=len(documents))

    async def _sync_description_document(self, job: Job) -> JobDocument | None:
        """Create, update or drop the job's description document to match the job."""
        existing = await self._document_repo.find_for_job(job.id, DocumentType.JOB_DESCRIPTION)
        description = (job.job_description or "").strip()

        if not description:
            if existing is not None:
                await self._ingestion.remove(existing.id)
                await self._document_repo.delete(existing.id)
            return None

        if existing is not None:
            existing.update(title=job.display_title, content=description)
            return await self._document_repo.update(existing)

        return await self._document_repo.create(
            JobDocument(
                user_id=job.user_id,
                job_id=job.id,
                title=job.display_title,
                content=description,
                document_type=DocumentType.JOB_DESCRIPTION,
            )
        )
