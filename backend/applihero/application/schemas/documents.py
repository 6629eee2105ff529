"""Pydantic DTOs for source documents."""

from datetime import datetime

from pydantic import BaseModel, Field

from applihero.domain.entities import DocumentType


class DocumentCreate(BaseModel):
    """Schema for pasting a new document. It is ingested on creation."""

    user_id: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255, examples=["Resume"])
    content: str = Field(..., examples=["Experienced product manager with 5 years leading teams."])
    document_type: DocumentType = DocumentType.OTHER
    job_id: str | None = Field(None, max_length=36, description="Omit for a user-global document")


class DocumentUpdate(BaseModel):
    """Schema for editing a document. A content change re-ingests it."""

    user_id: str = Field(..., min_length=1, max_length=255)
    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None


class DocumentResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    user_id: str
    job_id: str | None
    document_type: DocumentType
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    chunks: int | None = Field(None, description="Chunks stored by the last ingestion, when one ran")

    model_config = {"from_attributes": True}
