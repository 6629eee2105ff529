"""Unit tests for the pgvector similarity query builder and the search session settings."""

import pytest
from sqlalchemy.dialects import postgresql

from applihero.application.interfaces import RetrievalScope
from applihero.infrastructure.database.repositories.chunk_repository import (
    PgChunkRepository,
    build_similarity_query,
    hnsw_scan_settings,
)


def _sql(**kwargs) -> str:
    query = build_similarity_query([0.1, 0.2, 0.3], user_id="u1", **kwargs)
    return str(query.compile(dialect=postgresql.dialect()))


def test_orders_by_cosine_distance_and_filters_owner():
    sql = _sql()

    assert "<=>" in sql
    assert "job_document_chunks.user_id =" in sql
    assert "ORDER BY" in sql
    assert "LIMIT" in sql
    assert "job_document_chunks.job_id" not in sql.split("WHERE", 1)[1].split("ORDER BY")[0]


def test_job_and_global_scope_includes_null_job():
    sql = _sql(job_id="job-1", scope=RetrievalScope.JOB_AND_GLOBAL)
    assert "job_document_chunks.job_id IS NULL" in sql
    assert " OR " in sql


def test_job_only_scope_excludes_null_job():
    sql = _sql(job_id="job-1", scope=RetrievalScope.JOB_ONLY)
    assert "job_document_chunks.job_id =" in sql
    assert "IS NULL" not in sql


def test_filters_embedding_model_and_threshold():
    sql = _sql(embedding_model="openai/text-embedding-3-small", min_similarity=0.3)
    assert "job_document_chunks.embedding_model =" in sql
    assert ">=" in sql


def test_bound_parameters():
    query = build_similarity_query(
        [0.1, 0.2, 0.3], user_id="u1", job_id="job-1", limit=4, embedding_model="m"
    )
    params = query.compile(dialect=postgresql.dialect()).params

    assert "u1" in params.values()
    assert "job-1" in params.values()
    assert "m" in params.values()
    assert 4 in params.values()


# ── HNSW scan settings ──


class _EmptyResult:
    def all(self):
        return []


class RecordingSession:
    """Records the SQL of every executed statement."""

    def __init__(self):
        self.statements: list[str] = []

    async def execute(self, statement):
        self.statements.append(str(statement))
        return _EmptyResult()


def test_scan_settings_default_to_strict_iterative_scan():
    assert [str(s) for s in hnsw_scan_settings()] == [
        "SET LOCAL hnsw.iterative_scan = strict_order"
    ]


def test_scan_settings_with_ef_search():
    statements = [str(s) for s in hnsw_scan_settings("relaxed_order", ef_search=200)]
    assert statements == [
        "SET LOCAL hnsw.iterative_scan = relaxed_order",
        "SET LOCAL hnsw.ef_search = 200",
    ]


def test_scan_settings_can_be_disabled():
    assert hnsw_scan_settings(None, None) == []


def test_scan_settings_reject_unknown_mode():
    with pytest.raises(ValueError):
        hnsw_scan_settings("everything; DROP TABLE jobs")


@pytest.mark.asyncio
async def test_search_enables_iterative_scan_before_the_query():
    session = RecordingSession()
    repo = PgChunkRepository(session, ef_search=100)

    results = await repo.search_similar([0.1, 0.2, 0.3], user_id="u1", job_id="job-1", limit=3)

    assert results == []
    assert session.statements[0] == "SET LOCAL hnsw.iterative_scan = strict_order"
    assert session.statements[1] == "SET LOCAL hnsw.ef_search = 100"
    assert "job_document_chunks.user_id" in session.statements[2]
    assert len(session.statements) == 3
