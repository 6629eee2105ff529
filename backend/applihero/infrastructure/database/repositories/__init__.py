from .chunk_repository import PgChunkRepository
from .document_repository import SQLAlchemyDocumentRepository
from .job_repository import SQLAlchemyJobRepository
from .question_repository import SQLAlchemyCoachMessageRepository, SQLAlchemyQuestionRepository
from .resume_version_repository import SQLAlchemyResumeVersionRepository

__all__ = [
    "PgChunkRepository",
    "SQLAlchemyDocumentRepository",
    "SQLAlchemyJobRepository",
    "SQLAlchemyCoachMessageRepository",
    "SQLAlchemyQuestionRepository",
    "SQLAlchemyResumeVersionRepository",
]
