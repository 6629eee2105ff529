"""Unit tests for DocumentIngestionService."""

import pytest

from applihero.application.services import DocumentIngestionService
from applihero.domain.entities import DocumentType, JobDocument
from applihero.domain.exceptions import EmbeddingProviderError
from tests.fakes import InMemoryChunkRepository, KeywordEmbeddingProvider


# ── Helpers ──────────────────────────────────────────────────────────


def _document(content: str, doc_id: str = "doc-1", job_id: str | None = "job-1") -> JobDocument:
    return JobDocument(
        id=doc_id,
        user_id="user-1",
        job_id=job_id,
        title="Resume",
        content=content,
        document_type=DocumentType.RESUME,
    )


@pytest.fixture
def provider() -> KeywordEmbeddingProvider:
    return KeywordEmbeddingProvider()


@pytest.fixture
def repo() -> InMemoryChunkRepository:
    return InMemoryChunkRepository()


@pytest.fixture
def service(provider, repo) -> DocumentIngestionService:
    return DocumentIngestionService(provider, repo, max_chunk_chars=25, batch_size=2)


# ── Tests ────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_ingest_stores_one_row_per_chunk(service, repo, provider):
    count = await service.ingest(_document("Paragraph one.\n\nParagraph two.\n\nParagraph three."))

    assert count == 3
    stored = repo.for_document("doc-1")
    assert [c.chunk_index for c in stored] == [0, 1, 2]
    assert [c.content for c in stored] == ["Paragraph one.", "Paragraph two.", "Paragraph three."]
    assert all(c.user_id == "user-1" and c.job_id == "job-1" for c in stored)
    assert all(c.embedding_model == provider.model_name for c in stored)
    assert all(len(c.embedding) == provider.dimensions for c in stored)


@pytest.mark.asyncio
async def test_embeddings_are_requested_in_batches(service, provider):
    await service.ingest(_document("Paragraph one.\n\nParagraph two.\n\nParagraph three."))
    assert [len(batch) for batch in provider.batches] == [2, 1]


@pytest.mark.asyncio
async def test_reingest_replaces_previous_chunks(service, repo):
    await service.ingest(_document("Old cooking notes.\n\nOld garden notes."))
    await service.ingest(_document("Fresh python data."))

    stored = repo.for_document("doc-1")
    assert [c.content for c in stored] == ["Fresh python data."]
    assert [c.chunk_index for c in stored] == [0]


@pytest.mark.asyncio
async def test_reingest_leaves_other_documents_alone(service, repo):
    await service.ingest(_document("Keep me.", doc_id="doc-2"))
    await service.ingest(_document("First.", doc_id="doc-1"))
    await service.ingest(_document("Second.", doc_id="doc-1"))

    assert [c.content for c in repo.for_document("doc-2")] == ["Keep me."]


@pytest.mark.asyncio
async def test_empty_content_clears_chunks_without_embedding(service, repo, provider):
    await service.ingest(_document("Something to embed."))
    provider.batches.clear()

    count = await service.ingest(_document("  \n\n  "))

    assert count == 0
    assert repo.for_document("doc-1") == []
    assert provider.batches == []


@pytest.mark.asyncio
async def test_embedding_failure_keeps_previous_chunks(service, repo, provider):
    await service.ingest(_document("Original content."))
    provider.error = EmbeddingProviderError("openrouter", 503, "unavailable", retryable=True)

    with pytest.raises(EmbeddingProviderError):
        await service.ingest(_document("Replacement content."))

    assert [c.content for c in repo.for_document("doc-1")] == ["Original content."]


@pytest.mark.asyncio
async def test_store_failure_on_non_transactional_repo_leaves_no_chunks(service, repo):
    await service.ingest(_document("Original content."))
    repo.fail_on_store = RuntimeError("disk full")

    with pytest.raises(RuntimeError):
        await service.ingest(_document("Replacement content."))

    # The in-memory store deletes before inserting and cannot roll back.
    assert repo.for_document("doc-1") == []


@pytest.mark.asyncio
async def test_wrong_dimensions_are_rejected(repo):
    service = DocumentIngestionService(KeywordEmbeddingProvider(wrong_dimensions=True), repo)

    with pytest.raises(EmbeddingProviderError) as exc_info:
        await service.ingest(_document("Some text."))

    assert exc_info.value.status_code == 502
    assert repo.chunks == []


@pytest.mark.asyncio
async def test_document_without_id_is_rejected(service):
    with pytest.raises(ValueError):
        await service.ingest(_document("text", doc_id=None))


@pytest.mark.asyncio
async def test_remove_deletes_all_chunks(service, repo):
    await service.ingest(_document("Paragraph one.\n\nParagraph two."))
    removed = await service.remove("doc-1")
    assert removed == 2
    assert repo.for_document("doc-1") == []
