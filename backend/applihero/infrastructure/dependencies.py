"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from applihero.application.interfaces import RetrievalScope
from applihero.application.services import (
    CoachChatService,
    CoverLetterService,
    DocumentIngestionService,
    DocumentService,
    JobService,
    QuestionService,
    ResumeOptimizerService,
    RetrievalService,
)
from applihero.config import get_settings
from applihero.infrastructure.database.repositories import (
    PgChunkRepository,
    SQLAlchemyCoachMessageRepository,
    SQLAlchemyDocumentRepository,
    SQLAlchemyJobRepository,
    SQLAlchemyQuestionRepository,
    SQLAlchemyResumeVersionRepository,
)
from applihero.infrastructure.database.session import get_db_session
from applihero.infrastructure.openrouter import OpenRouterClient, OpenRouterEmbeddingProvider


def _build_chat_provider() -> OpenRouterClient:
    settings = get_settings()
    return OpenRouterClient(
        api_key=settings.openrouter_api_key,
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
    )


def _build_embedding_provider() -> OpenRouterEmbeddingProvider:
    settings = get_settings()
    return OpenRouterEmbeddingProvider(
        api_key=settings.openrouter_api_key,
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
        model=settings.embedding_model,
        model_dimensions=settings.embedding_dimensions,
        timeout=settings.embedding_timeout_seconds,
        max_attempts=settings.embedding_max_attempts,
    )


def _build_ingestion_service(session: AsyncSession) -> DocumentIngestionService:
    settings = get_settings()
    return DocumentIngestionService(
        embedding_provider=_build_embedding_provider(),
        chunk_repository=PgChunkRepository(session),
        max_chunk_chars=settings.chunk_max_chars,
        batch_size=settings.embedding_batch_size,
    )


def _build_retrieval_service(session: AsyncSession) -> RetrievalService:
    settings = get_settings()
    return RetrievalService(
        embedding_provider=_build_embedding_provider(),
        chunk_repository=PgChunkRepository(
            session,
            iterative_scan=settings.hnsw_iterative_scan or None,
            ef_search=settings.hnsw_ef_search,
        ),
        default_limit=settings.retrieval_default_limit,
        min_similarity=settings.retrieval_min_similarity,
        scope=RetrievalScope(settings.retrieval_scope_policy),
        context_max_chars=settings.context_max_chars,
    )


async def get_job_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[JobService, None]:
    """Provides a JobService with repositories and ingestion wired up."""
    yield JobService(
        job_repository=SQLAlchemyJobRepository(session),
        document_repository=SQLAlchemyDocumentRepository(session),
        ingestion_service=_build_ingestion_service(session),
    )


async def get_document_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[DocumentService, None]:
    """Provides a DocumentService that ingests on every content change."""
    yield DocumentService(
        document_repository=SQLAlchemyDocumentRepository(session),
        job_repository=SQLAlchemyJobRepository(session),
        ingestion_service=_build_ingestion_service(session),
    )


async def get_retrieval_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RetrievalService, None]:
    yield _build_retrieval_service(session)


async def get_coach_chat_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CoachChatService, None]:
    """Provides the coach chat with OpenRouter as the completion provider."""
    settings = get_settings()
    yield CoachChatService(
        chat_provider=_build_chat_provider(),
        retrieval_service=_build_retrieval_service(session),
        job_repository=SQLAlchemyJobRepository(session),
        message_repository=SQLAlchemyCoachMessageRepository(session),
        model=settings.chat_model,
        history_limit=settings.chat_history_limit,
    )


async def get_question_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[QuestionService, None]:
    settings = get_settings()
    yield QuestionService(
        question_repository=SQLAlchemyQuestionRepository(session),
        job_repository=SQLAlchemyJobRepository(session),
        chat_provider=_build_chat_provider(),
        retrieval_service=_build_retrieval_service(session),
        model=settings.chat_model,
    )


async def get_resume_optimizer_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ResumeOptimizerService, None]:
    settings = get_settings()
    yield ResumeOptimizerService(
        chat_provider=_build_chat_provider(),
        retrieval_service=_build_retrieval_service(session),
        job_repository=SQLAlchemyJobRepository(session),
        version_repository=SQLAlchemyResumeVersionRepository(session),
        model=settings.chat_model,
    )


async def get_cover_letter_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[CoverLetterService, None]:
    settings = get_settings()
    yield CoverLetterService(
        chat_provider=_build_chat_provider(),
        retrieval_service=_build_retrieval_service(session),
        job_repository=SQLAlchemyJobRepository(session),
        model=settings.chat_model,
    )
