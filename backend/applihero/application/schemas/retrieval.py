"""Pydantic schemas for retrieval API requests and responses."""

from pydantic import BaseModel, Field


# ── Request Schemas ──────────────────────────────────────────────────


class RetrievalSearchRequest(BaseModel):
    """Request body for a semantic search over the user's documents."""

    query: str = Field(..., min_length=1, description="Free-text query")
    user_id: str = Field(..., min_length=1, max_length=255)
    job_id: str | None = Field(None, description="Narrow to one job (plus global documents, per policy)")
    limit: int | None = Field(None, ge=1, le=50)
    min_similarity: float | None = Field(None, ge=-1.0, le=1.0)


# ── Response Schemas ─────────────────────────────────────────────────


class RetrievedChunkSchema(BaseModel):
    """A single ranked chunk."""

    document_id: str
    job_id: str | None = None
    chunk_index: int
    content: str
    similarity: float


class RetrievalSearchResponse(BaseModel):
    """Ranked chunks plus the context string the coaching prompts would see."""

    results: list[RetrievedChunkSchema] = []
    context: str = ""
    scope: str
