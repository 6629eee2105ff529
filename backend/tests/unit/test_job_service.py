"""Unit tests for JobService."""

import pytest

from applihero.application.schemas import JobCreate, JobUpdate
from applihero.application.services import DocumentIngestionService, JobService
from applihero.domain.entities import DocumentType, JobDocument
from applihero.domain.exceptions import EmbeddingProviderError, EntityNotFoundError
from tests.fakes import (
    InMemoryChunkRepository,
    InMemoryDocumentRepository,
    InMemoryJobRepository,
    KeywordEmbeddingProvider,
)


class FlakyIngestion(DocumentIngestionService):
    """Ingestion that fails for the listed document titles."""

    def __init__(self, *args, failing_titles: set[str], **kwargs):
        super().__init__(*args, **kwargs)
        self._failing_titles = failing_titles

    async def ingest(self, document: JobDocument) -> int:
        if document.title in self._failing_titles:
            raise EmbeddingProviderError("openrouter", 503, "unavailable", retryable=True)
        return await super().ingest(document)


@pytest.fixture
def repos():
    return InMemoryJobRepository(), InMemoryDocumentRepository(), InMemoryChunkRepository()


@pytest.fixture
def service(repos) -> JobService:
    jobs, documents, chunks = repos
    return JobService(jobs, documents, DocumentIngestionService(KeywordEmbeddingProvider(), chunks))


def _create(**overrides) -> JobCreate:
    data = {
        "user_id": "u1",
        "job_title": "Product Manager",
        "company_name": "Acme",
        "job_description": "Lead the product team.",
    }
    data.update(overrides)
    return JobCreate(**data)


@pytest.mark.asyncio
async def test_create_and_get_job(service: JobService):
    job = await service.create_job(_create())

    fetched = await service.get_job(job.id, "u1")

    assert fetched.job_title == "Product Manager"
    assert fetched.status == "Draft"
    assert fetched.display_title == "Product Manager at Acme"


@pytest.mark.asyncio
async def test_get_job_of_another_user_is_not_found(service: JobService):
    job = await service.create_job(_create())
    with pytest.raises(EntityNotFoundError):
        await service.get_job(job.id, "u2")


@pytest.mark.asyncio
async def test_list_jobs_only_returns_own_jobs(service: JobService):
    await service.create_job(_create())
    await service.create_job(_create(user_id="u2"))

    jobs = await service.list_jobs("u1")

    assert [j.user_id for j in jobs] == ["u1"]


@pytest.mark.asyncio
async def test_ingest_job_covers_description_and_global_documents(service: JobService, repos):
    _, documents, chunks = repos
    job = await service.create_job(_create())
    await documents.create(JobDocument(user_id="u1", title="Resume", content="Product work."))
    await documents.create(JobDocument(user_id="u2", title="Other resume", content="Not mine."))

    report = await service.ingest_job(job.id, "u1")

    assert report.job_id == job.id
    assert report.total_documents == 2
    assert {r.title for r in report.results} == {"Product Manager at Acme", "Resume"}
    assert all(r.status == "success" and r.chunks == 1 for r in report.results)
    assert {c.user_id for c in chunks.chunks} == {"u1"}


@pytest.mark.asyncio
async def test_ingest_job_reports_failures_and_continues(repos):
    jobs, documents, chunks = repos
    ingestion = FlakyIngestion(KeywordEmbeddingProvider(), chunks, failing_titles={"Transcript"})
    service = JobService(jobs, documents, ingestion)
    job = await service.create_job(_create())
    await documents.create(JobDocument(user_id="u1", title="Transcript", content="Grades."))
    await documents.create(JobDocument(user_id="u1", title="Resume", content="Product work."))

    report = await service.ingest_job(job.id, "u1")

    by_title = {r.title: r for r in report.results}
    assert by_title["Transcript"].status == "failed"
    assert "unavailable" in by_title["Transcript"].error
    assert by_title["Resume"].status == "success"
    assert by_title["Product Manager at Acme"].status == "success"


@pytest.mark.asyncio
async def test_ingest_job_twice_reuses_description_document(service: JobService, repos):
    _, documents, _ = repos
    job = await service.create_job(_create())

    await service.ingest_job(job.id, "u1")
    await service.ingest_job(job.id, "u1")

    described = [d for d in documents.documents.values() if d.document_type == DocumentType.JOB_DESCRIPTION]
    assert len(described) == 1


@pytest.mark.asyncio
async def test_update_description_reingests(service: JobService, repos):
    _, documents, chunks = repos
    job = await service.create_job(_create())
    await service.ingest_job(job.id, "u1")

    await service.update_job(job.id, JobUpdate(user_id="u1", job_description="Own the data roadmap."))

    doc = await documents.find_for_job(job.id, DocumentType.JOB_DESCRIPTION)
    assert doc.content == "Own the data roadmap."
    assert [c.content for c in chunks.for_document(doc.id)] == ["Own the data roadmap."]


@pytest.mark.asyncio
async def test_clearing_description_drops_document_and_chunks(service: JobService, repos):
    _, documents, chunks = repos
    job = await service.create_job(_create())
    await service.ingest_job(job.id, "u1")
    doc = await documents.find_for_job(job.id, DocumentType.JOB_DESCRIPTION)

    await service.update_job(job.id, JobUpdate(user_id="u1", job_description=""))

    assert await documents.find_for_job(job.id, DocumentType.JOB_DESCRIPTION) is None
    assert chunks.for_document(doc.id) == []


@pytest.mark.asyncio
async def test_update_without_description_skips_ingestion(service: JobService, repos):
    _, documents, _ = repos
    job = await service.create_job(_create())

    updated = await service.update_job(job.id, JobUpdate(user_id="u1", status="Applied"))

    assert updated.status == "Applied"
    assert documents.documents == {}


@pytest.mark.asyncio
async def test_delete_job(service: JobService):
    job = await service.create_job(_create())
    assert await service.delete_job(job.id, "u1") is True
    with pytest.raises(EntityNotFoundError):
        await service.get_job(job.id, "u1")
