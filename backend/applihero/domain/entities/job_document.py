"""Domain entity for source documents that feed the RAG pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class DocumentType(str, Enum):
    """Kind of text a document holds."""

    RESUME = "resume"
    TRANSCRIPT = "transcript"
    JOB_DESCRIPTION = "job_description"
    OTHER = "other"


@dataclass
class JobDocument:
    """A unit of ingestion owned by a user.

    ``job_id`` scopes the document to one job; ``None`` makes it user-global
    (résumé, transcript), visible to every job of that user.
    """

    user_id: str
    title: str
    content: str
    document_type: DocumentType = DocumentType.OTHER
    job_id: str | None = None
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, title: str | None = None, content: str | None = None) -> None:
        """Update document fields and refresh the updated_at timestamp."""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        self.updated_at = datetime.now(timezone.utc)
