"""FastAPI application factory for the AppliHero coaching API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from applihero.config import get_settings
from applihero.infrastructure.database import Base, engine
from applihero.infrastructure.logging.log_config import setup_logging
from applihero.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the configured PostgreSQL database when it is missing.

    Uses the ``postgres`` maintenance database; failures are logged and the
    regular engine connection reports the real problem afterwards.
    """
    import asyncpg

    settings = get_settings()
    db_name = urlparse(settings.database_url).path.lstrip("/")
    if not db_name:
        return

    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"
    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name)
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _ensure_schema() -> None:
    """Enable pgvector and create any missing tables. There are no migrations."""
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    setup_logging(settings)

    await _ensure_database_exists()
    await _ensure_schema()

    logger.info(
        "AppliHero API ready (env=%s, chat=%s, embeddings=%s/%d, scope=%s)",
        settings.app_env,
        settings.chat_model,
        settings.embedding_model,
        settings.embedding_dimensions,
        settings.retrieval_scope_policy,
    )
    if not settings.openrouter_api_key.strip():
        logger.warning("OPENROUTER_API_KEY is not configured; ingestion and coaching will fail.")

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("applihero.main:app", host="0.0.0.0", port=8020, reload=True)
