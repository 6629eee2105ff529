"""Domain entities for document chunks — text fragments with vector embeddings."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class DocumentChunk:
    """An immutable text segment of a document, suitable for vector search.

    Content belongs to the document (``document_id``); retrieval visibility is
    decided by ``user_id`` and ``job_id``. ``embedding_model`` records which
    model produced the vector so vectors from different models are never compared.
    """

    document_id: str
    user_id: str
    chunk_index: int
    content: str
    job_id: str | None = None
    embedding: list[float] = field(default_factory=list)
    embedding_model: str = ""
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class RetrievedChunk:
    """A chunk paired with its similarity to a query. Never persisted."""

    chunk: DocumentChunk
    similarity: float  # cosine similarity, higher is more relevant

    @property
    def content(self) -> str:
        return self.chunk.content
