from .chat_provider import ChatProvider
from .chunk_repository import ChunkRepository, RetrievalScope
from .coach_message_repository import CoachMessageRepository
from .document_repository import DocumentRepository
from .embedding_provider import EmbeddingProvider
from .job_repository import JobRepository
from .question_repository import QuestionRepository
from .resume_version_repository import ResumeVersionRepository

__all__ = [
    "ChatProvider",
    "ChunkRepository",
    "RetrievalScope",
    "CoachMessageRepository",
    "DocumentRepository",
    "EmbeddingProvider",
    "JobRepository",
    "QuestionRepository",
    "ResumeVersionRepository",
]
