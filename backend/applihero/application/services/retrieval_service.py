"""Retrieval service — turns a natural-language query into ranked document chunks.

Embeds the query with the same provider used at ingestion time, runs a
scoped similarity search, and assembles the best chunks into a bounded
prompt context for the coaching services.
"""

import logging

from applihero.application.interfaces.chunk_repository import ChunkRepository, RetrievalScope
from applihero.application.interfaces.embedding_provider import EmbeddingProvider
from applihero.domain.entities import RetrievedChunk
from applihero.domain.exceptions import EmbeddingProviderError, InvalidRequestError
from applihero.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("RetrievalService")

_DEFAULT_LIMIT = 6
_DEFAULT_CONTEXT_MAX_CHARS = 6000
CONTEXT_SEPARATOR = "\n---\n"


def assemble_context(
    results: list[RetrievedChunk],
    max_chars: int = _DEFAULT_CONTEXT_MAX_CHARS,
    separator: str = CONTEXT_SEPARATOR,
) -> str:
    """Join retrieved chunk contents, best first, without exceeding ``max_chars``.

    Stops at the first chunk that would overflow the budget so the context
    never ends mid-chunk.
    """
    parts: list[str] = []
    total = 0

    for result in results:
        addition = len(result.content) + (len(separator) if parts else 0)
        if total + addition > max_chars:
            logger.info(
                "Context budget reached (%d chars), keeping %d of %d chunks",
                max_chars,
                len(parts),
                len(results),
            )
            break
        parts.append(result.content)
        total += addition

    return separator.join(parts)


class RetrievalService:
    """Application service for scoped semantic retrieval over stored chunks."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        chunk_repository: ChunkRepository,
        *,
        default_limit: int = _DEFAULT_LIMIT,
        min_similarity: float = 0.0,
        scope: RetrievalScope = RetrievalScope.JOB_AND_GLOBAL,
        context_max_chars: int = _DEFAULT_CONTEXT_MAX_CHARS,
    ):
        self._embedding_provider = embedding_provider
        self._chunk_repo = chunk_repository
        self._default_limit = default_limit
        self._min_similarity = min_similarity
        self._scope = scope
        self._context_max_chars = context_max_chars

    @property
    def scope(self) -> RetrievalScope:
        return self._scope

    @property
    def context_max_chars(self) -> int:
        return self._context_max_chars

    async def retrieve(
        self,
        query: str,
        *,
        user_id: str,
        job_id: str | None = None,
        limit: int | None = None,
        min_similarity: float | None = None,
    ) -> list[RetrievedChunk]:
        """Return the chunks most relevant to ``query``, highest similarity first.

        An empty list means nothing matched; it is not an error. Embedding
        and storage failures propagate to the caller.

        Raises:
            InvalidRequestError: Blank query or user, or a non-positive limit.
            EmbeddingProviderError: The query vector could not be produced.
        """
        if not query or not query.strip():
            raise InvalidRequestError("Query must not be empty")
        if not user_id or not user_id.strip():
            raise InvalidRequestError("user_id is required for retrieval")

        limit = self._default_limit if limit is None else limit
        if limit < 1:
            raise InvalidRequestError(f"limit must be at least 1, got {limit}")
        threshold = self._min_similarity if min_similarity is None else min_similarity

        query_embedding = await self._embedding_provider.generate_query_embedding(query)
        expected_dims = self._embedding_provider.dimensions
        if len(query_embedding) != expected_dims:
            raise EmbeddingProviderError(
                provider=self._embedding_provider.model_name,
                status_code=502,
                message=(
                    f"Query embedding has {len(query_embedding)} dimensions, "
                    f"expected {expected_dims}"
                ),
            )

        with plog.timed_step(
            PipelineStage.RETRIEVE,
            f"Searching chunks of user {user_id}",
            job_id=job_id,
            scope=self._scope.value,
            limit=limit,
        ):
            candidates = await self._chunk_repo.search_similar(
                query_embedding,
                user_id=user_id,
                job_id=job_id,
                scope=self._scope,
                embedding_model=self._embedding_provider.model_name,
                limit=limit,
                min_similarity=threshold,
            )

        ranked = sorted(
            (c for c in candidates if c.similarity >= threshold),
            key=lambda c: (-c.similarity, c.chunk.document_id, c.chunk.chunk_index),
        )[:limit]

        if not ranked:
            logger.info("No chunks retrieved for user %s (job=%s)", user_id, job_id)
        else:
            logger.info(
                "Retrieved %d chunk(s) for user %s (job=%s, top=%.3f): %s",
                len(ranked),
                user_id,
                job_id,
                ranked[0].similarity,
                query[:80],
            )
        return ranked

    async def retrieve_context(
        self,
        query: str,
        *,
        user_id: str,
        job_id: str | None = None,
        limit: int | None = None,
    ) -> str:
        """Retrieve and assemble chunks into a single prompt context string."""
        results = await self.retrieve(query, user_id=user_id, job_id=job_id, limit=limit)
        return assemble_context(results, self._context_max_chars)
