"""Unit tests for DocumentService."""

import pytest

from applihero.application.schemas import DocumentCreate, DocumentUpdate
from applihero.application.services import DocumentIngestionService, DocumentService
from applihero.domain.entities import DocumentType, Job
from applihero.domain.exceptions import EntityNotFoundError
from tests.fakes import (
    InMemoryChunkRepository,
    InMemoryDocumentRepository,
    InMemoryJobRepository,
    KeywordEmbeddingProvider,
)


@pytest.fixture
def chunks() -> InMemoryChunkRepository:
    return InMemoryChunkRepository()


@pytest.fixture
def provider() -> KeywordEmbeddingProvider:
    return KeywordEmbeddingProvider()


@pytest.fixture
def service(chunks, provider) -> DocumentService:
    jobs = InMemoryJobRepository()
    jobs.jobs["job-1"] = Job(id="job-1", user_id="u1", job_title="PM", company_name="Acme")
    ingestion = DocumentIngestionService(provider, chunks, max_chunk_chars=30)
    return DocumentService(InMemoryDocumentRepository(), jobs, ingestion)


@pytest.mark.asyncio
async def test_create_document_ingests_immediately(service: DocumentService, chunks):
    document, count = await service.create_document(
        DocumentCreate(
            user_id="u1",
            title="Resume",
            content="Led product teams for years.\n\nShipped data tools.",
            document_type=DocumentType.RESUME,
        )
    )

    assert count == 2
    assert document.job_id is None
    assert len(chunks.for_document(document.id)) == 2


@pytest.mark.asyncio
async def test_create_document_for_foreign_job_is_rejected(service: DocumentService, chunks):
    with pytest.raises(EntityNotFoundError):
        await service.create_document(
            DocumentCreate(user_id="u2", title="Notes", content="x", job_id="job-1")
        )
    assert chunks.chunks == []


@pytest.mark.asyncio
async def test_update_title_only_does_not_reingest(service: DocumentService, provider):
    document, _ = await service.create_document(
        DocumentCreate(user_id="u1", title="Resume", content="Some content.")
    )
    provider.batches.clear()

    updated, count = await service.update_document(
        document.id, DocumentUpdate(user_id="u1", title="CV")
    )

    assert updated.title == "CV"
    assert count is None
    assert provider.batches == []


@pytest.mark.asyncio
async def test_update_content_replaces_chunks(service: DocumentService, chunks):
    document, _ = await service.create_document(
        DocumentCreate(user_id="u1", title="Resume", content="Old text.")
    )

    _, count = await service.update_document(
        document.id, DocumentUpdate(user_id="u1", content="New text.")
    )

    assert count == 1
    assert [c.content for c in chunks.for_document(document.id)] == ["New text."]


@pytest.mark.asyncio
async def test_documents_are_private(service: DocumentService):
    document, _ = await service.create_document(
        DocumentCreate(user_id="u1", title="Resume", content="Private.")
    )
    with pytest.raises(EntityNotFoundError):
        await service.get_document(document.id, "u2")
    with pytest.raises(EntityNotFoundError):
        await service.delete_document(document.id, "u2")


@pytest.mark.asyncio
async def test_delete_document_removes_chunks(service: DocumentService, chunks):
    document, _ = await service.create_document(
        DocumentCreate(user_id="u1", title="Resume", content="Gone soon.")
    )

    assert await service.delete_document(document.id, "u1") is True
    assert chunks.for_document(document.id) == []


@pytest.mark.asyncio
async def test_list_documents_filters_by_job(service: DocumentService):
    await service.create_document(DocumentCreate(user_id="u1", title="Global", content="a"))
    await service.create_document(
        DocumentCreate(user_id="u1", title="Scoped", content="b", job_id="job-1")
    )

    assert {d.title for d in await service.list_documents("u1")} == {"Global", "Scoped"}
    assert [d.title for d in await service.list_documents("u1", job_id="job-1")] == ["Scoped"]
