"""SQLAlchemy ORM model for document chunks with pgvector embeddings."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)

from pgvector.sqlalchemy import Vector

from applihero.config import get_settings
from applihero.infrastructure.database.base import Base

EMBEDDING_DIMENSIONS = get_settings().embedding_dimensions  # HNSW max: 2000


class DocumentChunkModel(Base):
    """A text chunk of a job document, with a vector embedding.

    Rows are replaced wholesale whenever their document is re-ingested.
    ``user_id`` and ``job_id`` are copied from the document so retrieval can
    filter without a join.
    """

    __tablename__ = "job_document_chunks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    document_id = Column(
        String(36),
        ForeignKey("job_documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(255), nullable=False)
    job_id = Column(String(36), nullable=True)
    chunk_index = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    embedding = Column(Vector(EMBEDDING_DIMENSIONS), nullable=False)
    embedding_model = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunk_index"),
        Index("ix_document_chunks_scope", "user_id", "job_id"),
        Index("idx_document_chunks_embedding_hnsw", embedding, postgresql_using="hnsw",
              postgresql_ops={"embedding": "vector_cosine_ops"}),
    )
