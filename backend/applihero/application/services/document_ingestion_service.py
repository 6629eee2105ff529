"""Document ingestion service — orchestrates chunking, embedding generation, and storage.

This is an application service that coordinates:
1. Splitting document text into paragraph-respecting chunks
2. Generating embeddings via the EmbeddingProvider (batched)
3. Replacing the document's stored chunks via the ChunkRepository
"""

import logging
import time

from applihero.application.interfaces.chunk_repository import ChunkRepository
from applihero.application.interfaces.embedding_provider import EmbeddingProvider
from applihero.application.services.chunker import DEFAULT_MAX_CHUNK_CHARS, split_into_chunks
from applihero.domain.entities import DocumentChunk, JobDocument
from applihero.domain.exceptions import EmbeddingProviderError
from applihero.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("DocumentIngestionService")

_DEFAULT_BATCH_SIZE = 100  # Max texts per embedding API call


class DocumentIngestionService:
    """Application service for turning a document into searchable chunks.

    Re-ingestion is a full replace: all previously stored chunks of the
    document are removed and the new set is inserted. Embeddings are computed
    before anything is deleted, so an embedding failure leaves the previous
    chunk set in place.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        chunk_repository: ChunkRepository,
        *,
        max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS,
        batch_size: int = _DEFAULT_BATCH_SIZE,
    ):
        self._embedding_provider = embedding_provider
        self._chunk_repo = chunk_repository
        self._max_chunk_chars = max_chunk_chars
        self._batch_size = max(1, batch_size)

    async def ingest(self, document: JobDocument) -> int:
        """Chunk, embed and store a document, replacing its previous chunks.

        Returns:
            Number of chunks stored.
        """
        if not document.id:
            raise ValueError("Cannot ingest a document without an ID")

        start = time.monotonic()
        plog.step_start(
            PipelineStage.PIPELINE,
            f"Ingesting '{document.title}'",
            document_id=document.id,
            type=document.document_type.value,
        )

        texts = split_into_chunks(document.content or "", self._max_chunk_chars)
        plog.step_complete(PipelineStage.CHUNK, f"{len(texts)} chunk(s)", max_chars=self._max_chunk_chars)

        if not texts:
            # No embeddable text left — still clear what the old content produced.
            await self._chunk_repo.delete_by_document(document.id)
            logger.info("No embeddable text for document %s", document.id)
            return 0

        with plog.timed_step(PipelineStage.EMBED, f"Embedding {len(texts)} chunk(s)"):
            embeddings = await self._embed(texts)

        model_name = self._embedding_provider.model_name
        chunks = [
            DocumentChunk(
                document_id=document.id,
                user_id=document.user_id,
                job_id=document.job_id,
                chunk_index=i,
                content=text,
                embedding=embedding,
                embedding_model=model_name,
            )
            for i, (text, embedding) in enumerate(zip(texts, embeddings, strict=True))
        ]

        with plog.timed_step(PipelineStage.STORE, f"Replacing chunks of {document.id}"):
            await self._chunk_repo.replace_document_chunks(document.id, chunks)

        duration_ms = int((time.monotonic() - start) * 1000)
        plog.step_complete(
            PipelineStage.COMPLETE,
            f"Ingested document {document.id}",
            chunks=len(chunks),
            duration_ms=duration_ms,
        )
        return len(chunks)

    async def remove(self, document_id: str) -> int:
        """Delete every stored chunk of a document."""
        return await self._chunk_repo.delete_by_document(document_id)

    async def _embed(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in batches and check every vector's dimensionality."""
        expected_dims = self._embedding_provider.dimensions
        embeddings: list[list[float]] = []

        for batch_start in range(0, len(texts), self._batch_size):
            batch = texts[batch_start : batch_start + self._batch_size]
            plog.detail("Embedding batch", start=batch_start, size=len(batch))
            batch_embeddings = await self._embedding_provider.generate_embeddings(batch)
            if len(batch_embeddings) != len(batch):
                raise EmbeddingProviderError(
                    provider=self._embedding_provider.model_name,
                    status_code=502,
                    message=f"Expected {len(batch)} embeddings, got {len(batch_embeddings)}",
                )
            embeddings.extend(batch_embeddings)

        for vector in embeddings:
            if len(vector) != expected_dims:
                raise EmbeddingProviderError(
                    provider=self._embedding_provider.model_name,
                    status_code=502,
                    message=f"Embedding has {len(vector)} dimensions, expected {expected_dims}",
                )
        return embeddings
