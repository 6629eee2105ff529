"""Logging setup for the coaching API.

Levels come from Settings, one per category, so the RAG pipeline can be
traced at DEBUG while SQLAlchemy and httpx stay quiet.

Usage:
    from applihero.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from applihero.config import Settings, get_settings

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

# ── Settings field → logger names ───────────────────────────────────

_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool"),
    "log_level_http": ("httpx", "httpcore"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    # PipelineLogger instances log under their component name.
    "log_level_ingestion": (
        "DocumentIngestionService",
        "RetrievalService",
        "applihero.application.services.document_ingestion_service",
        "applihero.application.services.retrieval_service",
    ),
    "log_level_coaching": (
        "applihero.application.services.coach_chat_service",
        "applihero.application.services.question_service",
        "applihero.application.services.resume_optimizer_service",
        "applihero.application.services.cover_letter_service",
        "applihero.application.services.job_service",
    ),
    "log_level_openrouter": ("applihero.infrastructure.openrouter",),
}


def setup_logging(settings: Settings | None = None) -> None:
    """Apply root and per-category log levels; add a stderr handler if none exists."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn installs its own handlers; tests and scripts do not.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    levels: dict[str, str] = {}
    for field_name, logger_names in _CATEGORY_MAP.items():
        raw_level = getattr(settings, field_name, "INFO")
        levels[field_name.removeprefix("log_level_")] = raw_level
        for name in logger_names:
            logging.getLogger(name).setLevel(_parse_level(raw_level))

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        " ".join(f"{k}={v}" for k, v in levels.items()),
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names mean INFO."""
    numeric = getattr(logging, raw.upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
