"""Abstract repository interface (port) for document chunks and vector search."""

from abc import ABC, abstractmethod
from enum import Enum

from applihero.domain.entities.document_chunk import DocumentChunk, RetrievedChunk


class RetrievalScope(str, Enum):
    """Which chunks a job-scoped query may see.

    JOB_AND_GLOBAL: chunks of the job plus the user's global chunks (job_id IS NULL).
    JOB_ONLY: chunks of the job only.
    Without a job, every chunk of the user is eligible under both policies.
    """

    JOB_AND_GLOBAL = "job_and_global"
    JOB_ONLY = "job_only"


class ChunkRepository(ABC):
    """Port for document chunk persistence and vector search."""

    @abstractmethod
    async def store_chunks(self, chunks: list[DocumentChunk]) -> None:
        """Persist a batch of document chunks with their embeddings."""
        ...

    @abstractmethod
    async def delete_by_document(self, document_id: str) -> int:
        """Delete all chunks for a document. Returns count of deleted rows."""
        ...

    @abstractmethod
    async def replace_document_chunks(
        self, document_id: str, chunks: list[DocumentChunk]
    ) -> None:
        """Delete every stored chunk of ``document_id`` and insert ``chunks``.

        Implementations backed by a transactional store perform both steps
        atomically.
        """
        ...

    @abstractmethod
    async def search_similar(
        self,
        query_embedding: list[float],
        *,
        user_id: str,
        job_id: str | None = None,
        scope: RetrievalScope = RetrievalScope.JOB_AND_GLOBAL,
        embedding_model: str | None = None,
        limit: int = 6,
        min_similarity: float | None = None,
    ) -> list[RetrievedChunk]:
        """Find the user's chunks most similar to the query embedding.

        Args:
            query_embedding: The query vector.
            user_id: Owner filter — required.
            job_id: Optional job filter, interpreted through ``scope``.
            scope: Job-scoping policy.
            embedding_model: Only compare against vectors from this model.
            limit: Maximum number of results.
            min_similarity: Drop results scoring below this value.

        Returns:
            List of RetrievedChunk ordered by descending similarity.
        """
        ...
