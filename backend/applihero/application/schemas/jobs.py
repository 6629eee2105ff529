"""Pydantic DTOs (Data Transfer Objects) for jobs and job ingestion."""

from datetime import datetime

from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    """Schema for creating a new job."""

    user_id: str = Field(..., min_length=1, max_length=255)
    job_title: str = Field(..., min_length=1, max_length=255, examples=["Product Manager"])
    company_name: str = Field(..., min_length=1, max_length=255, examples=["Acme"])
    job_description: str | None = Field(None, examples=["Lead the roadmap for our payments product."])
    status: str = Field("Draft", max_length=50)


class JobUpdate(BaseModel):
    """Schema for updating a job — all fields optional except the owner."""

    user_id: str = Field(..., min_length=1, max_length=255)
    job_title: str | None = Field(None, min_length=1, max_length=255)
    company_name: str | None = Field(None, min_length=1, max_length=255)
    job_description: str | None = None
    status: str | None = Field(None, max_length=50)


class JobResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    user_id: str
    job_title: str
    company_name: str
    job_description: str | None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JobIngestRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)


class DocumentIngestionResult(BaseModel):
    """Outcome of ingesting one document."""

    document_id: str
    title: str
    document_type: str
    status: str  # "success" | "failed"
    chunks: int = 0
    error: str | None = None


class JobIngestionReport(BaseModel):
    """Per-document report for a job ingestion run."""

    job_id: str
    results: list[DocumentIngestionResult] = []
    total_documents: int = 0
