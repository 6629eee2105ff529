"""SQLAlchemy implementation of ChunkRepository — pgvector-powered vector search."""

import logging

from sqlalchemy import Select, TextClause, delete, or_, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from applihero.application.interfaces.chunk_repository import ChunkRepository, RetrievalScope
from applihero.domain.entities.document_chunk import DocumentChunk, RetrievedChunk
from applihero.infrastructure.database.models.document_chunk_models import DocumentChunkModel

logger = logging.getLogger(__name__)

ITERATIVE_SCAN_MODES = frozenset({"off", "strict_order", "relaxed_order"})


def hnsw_scan_settings(
    iterative_scan: str | None = "strict_order", ef_search: int | None = None
) -> list[TextClause]:
    """Transaction-local pgvector settings applied before a similarity search.

    The owner, scope and model filters run after the HNSW index scan. With an
    iterative scan (pgvector 0.8+) the index keeps producing candidates until
    enough rows pass those filters, instead of stopping after
    ``hnsw.ef_search`` candidates. ``strict_order`` keeps results in exact
    distance order.
    """
    statements = []
    if iterative_scan:
        if iterative_scan not in ITERATIVE_SCAN_MODES:
            raise ValueError(f"Unknown hnsw.iterative_scan mode: {iterative_scan}")
        statements.append(text(f"SET LOCAL hnsw.iterative_scan = {iterative_scan}"))
    if ef_search is not None:
        statements.append(text(f"SET LOCAL hnsw.ef_search = {int(ef_search)}"))
    return statements


def build_similarity_query(
    query_embedding: list[float],
    *,
    user_id: str,
    job_id: str | None = None,
    scope: RetrievalScope = RetrievalScope.JOB_AND_GLOBAL,
    embedding_model: str | None = None,
    limit: int = 6,
    min_similarity: float | None = None,
) -> Select:
    """Build the scoped cosine-similarity SELECT over job_document_chunks.

    Cosine similarity is ``1 - (embedding <=> query)``; rows are ordered by
    distance so the HNSW index can serve the query.
    """
    distance = DocumentChunkModel.embedding.cosine_distance(query_embedding)
    similarity = (1 - distance).label("similarity")

    query = select(
        DocumentChunkModel.id,
        DocumentChunkModel.document_id,
        DocumentChunkModel.user_id,
        DocumentChunkModel.job_id,
        DocumentChunkModel.chunk_index,
        DocumentChunkModel.content,
        DocumentChunkModel.embedding_model,
        DocumentChunkModel.created_at,
        similarity,
    ).where(DocumentChunkModel.user_id == user_id)

    if job_id is not None:
        if scope == RetrievalScope.JOB_ONLY:
            query = query.where(DocumentChunkModel.job_id == job_id)
        else:
            query = query.where(
                or_(DocumentChunkModel.job_id == job_id, DocumentChunkModel.job_id.is_(None))
            )

    if embedding_model:
        query = query.where(DocumentChunkModel.embedding_model == embedding_model)

    if min_similarity is not None:
        query = query.where(1 - distance >= min_similarity)

    return query.order_by(
        distance,
        DocumentChunkModel.document_id,
        DocumentChunkModel.chunk_index,
    ).limit(limit)


class PgChunkRepository(ChunkRepository):
    """Concrete chunk repository backed by PostgreSQL + pgvector."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        iterative_scan: str | None = "strict_order",
        ef_search: int | None = None,
    ):
        self._session = session
        self._scan_settings = hnsw_scan_settings(iterative_scan, ef_search)

    async def store_chunks(self, chunks: list[DocumentChunk]) -> None:
        """Persist a batch of document chunks with their embeddings."""
        if not chunks:
            return

        models = [
            DocumentChunkModel(
                document_id=chunk.document_id,
                user_id=chunk.user_id,
                job_id=chunk.job_id,
                chunk_index=chunk.chunk_index,
                content=chunk.content,
                embedding=chunk.embedding,
                embedding_model=chunk.embedding_model,
            )
            for chunk in chunks
        ]

        self._session.add_all(models)
        await self._session.flush()
        logger.info("Stored %d chunks for document %s", len(models), chunks[0].document_id)

    async def delete_by_document(self, document_id: str) -> int:
        """Delete all chunks belonging to a document."""
        result = await self._session.execute(
            delete(DocumentChunkModel).where(DocumentChunkModel.document_id == document_id)
        )
        count = result.rowcount
        if count > 0:
            logger.info("Deleted %d chunks for document %s", count, document_id)
        return count

    async def replace_document_chunks(
        self, document_id: str, chunks: list[DocumentChunk]
    ) -> None:
        """Delete + insert inside one SAVEPOINT; a failed insert restores the old rows."""
        async with self._session.begin_nested():
            await self.delete_by_document(document_id)
            await self.store_chunks(chunks)

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
        """Find the user's chunks most similar to the query embedding."""
        query = build_similarity_query(
            query_embedding,
            user_id=user_id,
            job_id=job_id,
            scope=scope,
            embedding_model=embedding_model,
            limit=limit,
            min_similarity=min_similarity,
        )
        for statement in self._scan_settings:
            await self._session.execute(statement)
        result = await self._session.execute(query)
        rows = result.all()

        return [
            RetrievedChunk(
                chunk=DocumentChunk(
                    id=row.id,
                    document_id=row.document_id,
                    user_id=row.user_id,
                    job_id=row.job_id,
                    chunk_index=row.chunk_index,
                    content=row.content,
                    embedding=[],  # Don't return full embedding in search results
                    embedding_model=row.embedding_model,
                    created_at=row.created_at,
                ),
                similarity=float(row.similarity),
            )
            for row in rows
        ]
