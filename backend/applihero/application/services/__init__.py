from .chunker import split_into_chunks, split_paragraphs
from .coach_chat_service import CoachChatService
from .cover_letter_service import CoverLetterService
from .document_ingestion_service import DocumentIngestionService
from .document_service import DocumentService
from .job_service import JobService
from .question_service import QuestionService
from .resume_optimizer_service import ResumeOptimizerService
from .retrieval_service import RetrievalService, assemble_context

__all__ = [
    "split_into_chunks",
    "split_paragraphs",
    "CoachChatService",
    "CoverLetterService",
    "DocumentIngestionService",
    "DocumentService",
    "JobService",
    "QuestionService",
    "ResumeOptimizerService",
    "RetrievalService",
    "assemble_context",
]
