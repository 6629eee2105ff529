from .document_chunk_models import DocumentChunkModel
from .job_models import (
    CoachMessageModel,
    JobDocumentModel,
    JobModel,
    QuestionModel,
    ResumeVersionModel,
)

__all__ = [
    "DocumentChunkModel",
    "CoachMessageModel",
    "JobDocumentModel",
    "JobModel",
    "QuestionModel",
    "ResumeVersionModel",
]
