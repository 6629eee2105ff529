"""In-memory implementations of the application ports, shared by unit and API tests."""

import math
import uuid
from datetime import datetime, timedelta, timezone

from applihero.application.interfaces import (
    ChatProvider,
    ChunkRepository,
    CoachMessageRepository,
    DocumentRepository,
    EmbeddingProvider,
    JobRepository,
    QuestionRepository,
    ResumeVersionRepository,
    RetrievalScope,
)
from applihero.domain.entities import (
    ChatCompletionResult,
    ChatMessage,
    CoachMessage,
    DocumentChunk,
    DocumentType,
    Job,
    JobDocument,
    Question,
    ResumeVersion,
    RetrievedChunk,
    TokenUsage,
)

# Each axis counts occurrences of a word stem, so texts sharing stems point the same way.
KEYWORD_AXES = [
    "product",
    "manag",
    "experi",
    "lead",
    "team",
    "python",
    "data",
    "cook",
    "garden",
    "weather",
    "university",
    "gpa",
]


def cosine_similarity(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class KeywordEmbeddingProvider(EmbeddingProvider):
    """Deterministic bag-of-stems embeddings, plus a small constant bias axis."""

    def __init__(self, model: str = "test/keyword-embedding", *, wrong_dimensions: bool = False):
        self._model = model
        self._wrong_dimensions = wrong_dimensions
        self.batches: list[list[str]] = []
        self.queries: list[str] = []
        self.error: Exception | None = None

    @property
    def dimensions(self) -> int:
        return len(KEYWORD_AXES) + 1

    @property
    def model_name(self) -> str:
        return self._model

    def embed(self, text: str) -> list[float]:
        lowered = text.lower()
        vector = [float(lowered.count(stem)) for stem in KEYWORD_AXES] + [0.1]
        return vector[:-1] if self._wrong_dimensions else vector

    async def generate_embeddings(self, texts: list[str]) -> list[list[float]]:
        if self.error is not None:
            raise self.error
        self.batches.append(list(texts))
        return [self.embed(t) for t in texts]

    async def generate_query_embedding(self, query: str) -> list[float]:
        if self.error is not None:
            raise self.error
        self.queries.append(query)
        return self.embed(query)


class InMemoryChunkRepository(ChunkRepository):
    """Chunk store with brute-force cosine search.

    ``replace_document_chunks`` is NOT transactional: it deletes, then inserts.
    Set ``fail_on_store`` to make the insert step raise.
    """

    def __init__(self):
        self.chunks: list[DocumentChunk] = []
        self.fail_on_store: Exception | None = None
        self._next_id = 1

    async def store_chunks(self, chunks: list[DocumentChunk]) -> None:
        if self.fail_on_store is not None:
            raise self.fail_on_store
        for chunk in chunks:
            self.chunks.append(
                DocumentChunk(
                    id=self._next_id,
                    document_id=chunk.document_id,
                    user_id=chunk.user_id,
                    job_id=chunk.job_id,
                    chunk_index=chunk.chunk_index,
                    content=chunk.content,
                    embedding=list(chunk.embedding),
                    embedding_model=chunk.embedding_model,
                )
            )
            self._next_id += 1

    async def delete_by_document(self, document_id: str) -> int:
        before = len(self.chunks)
        self.chunks = [c for c in self.chunks if c.document_id != document_id]
        return before - len(self.chunks)

    async def replace_document_chunks(
        self, document_id: str, chunks: list[DocumentChunk]
    ) -> None:
        await self.delete_by_document(document_id)
        await self.store_chunks(chunks)

    async def search_similar(
        self,
        query_embedding: list[float],
        *,
        user_id: str,
        job_id: str | None = None,
        scope: RetrievalScope = RetrievalScope.JOB_AND_GLOBAL,
        embedding_model: str | None = None,
        limit: int = 6,
        min_similarity: float | None = None,
    ) -> list[RetrievedChunk]:
        results = []
        for chunk in self.chunks:
            if chunk.user_id != user_id:
                continue
            if job_id is not None:
                if scope == RetrievalScope.JOB_ONLY and chunk.job_id != job_id:
                    continue
                if scope == RetrievalScope.JOB_AND_GLOBAL and chunk.job_id not in (job_id, None):
                    continue
            if embedding_model and chunk.embedding_model != embedding_model:
                continue
            similarity = cosine_similarity(query_embedding, chunk.embedding)
            if min_similarity is not None and similarity < min_similarity:
                continue
            results.append(RetrievedChunk(chunk=chunk, similarity=similarity))

        results.sort(key=lambda r: (-r.similarity, r.chunk.document_id, r.chunk.chunk_index))
        return results[:limit]

    def for_document(self, document_id: str) -> list[DocumentChunk]:
        return sorted(
            (c for c in self.chunks if c.document_id == document_id),
            key=lambda c: c.chunk_index,
        )


class FakeChatProvider(ChatProvider):
    """Returns scripted completions and records every request."""

    def __init__(self, *replies: str):
        self._replies = list(replies) or ["OK"]
        self.calls: list[dict] = []
        self.error: Exception | None = None

    @property
    def provider_name(self) -> str:
        return "fake"

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> ChatCompletionResult:
        self.calls.append(
            {
                "messages": messages,
                "model": model,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        content = self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]
        return ChatCompletionResult(
            model=model or "fake-model",
            content=content,
            finish_reason="stop",
            usage=TokenUsage(prompt_tokens=10, completion_tokens=5, total_tokens=15),
            provider="fake",
        )

    @property
    def last_prompt(self) -> str:
        return self.calls[-1]["messages"][-1].content


class InMemoryJobRepository(JobRepository):
    def __init__(self):
        self.jobs: dict[str, Job] = {}

    async def get_by_id(self, job_id: str) -> Job | None:
        return self.jobs.get(job_id)

    async def list_for_user(self, user_id: str, skip: int = 0, limit: int = 100) -> list[Job]:
        jobs = [j for j in self.jobs.values() if j.user_id == user_id]
        jobs.sort(key=lambda j: j.updated_at, reverse=True)
        return jobs[skip : skip + limit]

    async def create(self, job: Job) -> Job:
        job.id = job.id or str(uuid.uuid4())
        self.jobs[job.id] = job
        return job

    async def update(self, job: Job) -> Job:
        self.jobs[job.id] = job
        return job

    async def delete(self, job_id: str) -> bool:
        return self.jobs.pop(job_id, None) is not None


class InMemoryDocumentRepository(DocumentRepository):
    def __init__(self):
        self.documents: dict[str, JobDocument] = {}

    async def get_by_id(self, document_id: str) -> JobDocument | None:
        return self.documents.get(document_id)

    async def list_for_user(
        self, user_id: str, *, job_id: str | None = None, global_only: bool = False
    ) -> list[JobDocument]:
        docs = [d for d in self.documents.values() if d.user_id == user_id]
        if job_id is not None:
            docs = [d for d in docs if d.job_id == job_id]
        elif global_only:
            docs = [d for d in docs if d.job_id is None]
        return docs

    async def find_for_job(
        self, job_id: str, document_type: DocumentType
    ) -> JobDocument | None:
        for doc in self.documents.values():
            if doc.job_id == job_id and doc.document_type == document_type:
                return doc
        return None

    async def create(self, document: JobDocument) -> JobDocument:
        document.id = document.id or str(uuid.uuid4())
        self.documents[document.id] = document
        return document

    async def update(self, document: JobDocument) -> JobDocument:
        self.documents[document.id] = document
        return document

    async def delete(self, document_id: str) -> bool:
        return self.documents.pop(document_id, None) is not None


class InMemoryQuestionRepository(QuestionRepository):
    def __init__(self):
        self.questions: dict[str, Question] = {}

    async def get_by_id(self, question_id: str) -> Question | None:
        return self.questions.get(question_id)

    async def list_for_job(self, job_id: str) -> list[Question]:
        return [q for q in self.questions.values() if q.job_id == job_id]

    async def create(self, question: Question) -> Question:
        question.id = question.id or str(uuid.uuid4())
        self.questions[question.id] = question
        return question

    async def update(self, question: Question) -> Question:
        self.questions[question.id] = question
        return question


class InMemoryCoachMessageRepository(CoachMessageRepository):
    def __init__(self):
        self.messages: list[CoachMessage] = []
        self.error: Exception | None = None

    async def list_for_job(self, job_id: str, limit: int = 20) -> list[CoachMessage]:
        job_messages = [m for m in self.messages if m.job_id == job_id]
        return job_messages[-limit:] if limit else []

    async def add_many(self, messages: list[CoachMessage]) -> None:
        if self.error is not None:
            raise self.error
        self.messages.extend(messages)

    def seed(self, job_id: str, turns: list[tuple[str, str]]) -> None:
        """Append (role, content) turns with increasing timestamps."""
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        offset = len(self.messages)
        for i, (role, content) in enumerate(turns):
            self.messages.append(
                CoachMessage(
                    job_id=job_id,
                    role=role,
                    content=content,
                    created_at=start + timedelta(minutes=offset + i),
                )
            )


class InMemoryResumeVersionRepository(ResumeVersionRepository):
    def __init__(self):
        self.versions: list[ResumeVersion] = []

    async def list_for_job(self, job_id: str, user_id: str) -> list[ResumeVersion]:
        return [v for v in self.versions if v.job_id == job_id and v.user_id == user_id]

    async def create(self, version: ResumeVersion) -> ResumeVersion:
        version.id = version.id or str(uuid.uuid4())
        self.versions.append(version)
        return version
