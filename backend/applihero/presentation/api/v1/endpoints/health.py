"""Liveness endpoint. Touches neither the database nor OpenRouter."""

from fastapi import APIRouter

from applihero.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Report the running version and the models the RAG pipeline is configured with."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "chat_model": settings.chat_model,
        "embedding_model": settings.embedding_model,
        "retrieval_scope": settings.retrieval_scope_policy,
    }
