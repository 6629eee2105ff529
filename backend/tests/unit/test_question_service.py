"""Unit tests for QuestionService and feedback parsing."""

import pytest
import pytest_asyncio

from applihero.application.schemas import QuestionCreate, QuestionUpdate
from applihero.application.services import (
    DocumentIngestionService,
    QuestionService,
    RetrievalService,
)
from applihero.application.services.question_service import parse_feedback
from applihero.domain.entities import Job, JobDocument
from applihero.domain.exceptions import EntityNotFoundError, InvalidRequestError
from tests.fakes import (
    FakeChatProvider,
    InMemoryChunkRepository,
    InMemoryJobRepository,
    InMemoryQuestionRepository,
    KeywordEmbeddingProvider,
)

FEEDBACK_REPLY = """Score: 7/10
Feedback:
• Mention the team size you led.
• Tie the answer to the company's product."""


# ── Helpers ──


@pytest_asyncio.fixture
async def setup():
    embeddings = KeywordEmbeddingProvider()
    chunks = InMemoryChunkRepository()
    jobs = InMemoryJobRepository()
    questions = InMemoryQuestionRepository()
    chat = FakeChatProvider(FEEDBACK_REPLY)

    await jobs.create(Job(id="job-1", user_id="u1", job_title="PM", company_name="Acme"))
    await jobs.create(Job(id="job-2", user_id="u1", job_title="Analyst", company_name="Beta"))
    await DocumentIngestionService(embeddings, chunks).ingest(
        JobDocument(
            id="resume",
            user_id="u1",
            title="Resume",
            content="Experienced product manager with 5 years leading teams.",
        )
    )
    service = QuestionService(
        questions, jobs, chat, RetrievalService(embeddings, chunks), model="test/chat"
    )
    return service, questions, chat


# ── Parsing ──


def test_parse_feedback_extracts_score_and_bullets():
    feedback = parse_feedback(FEEDBACK_REPLY)
    assert feedback.score == 7
    assert feedback.feedback.startswith("• Mention the team size")
    assert "Score" not in feedback.feedback


def test_parse_feedback_is_case_insensitive():
    assert parse_feedback("score:9\nfeedback: solid").score == 9


def test_parse_feedback_without_markers_keeps_text():
    feedback = parse_feedback("  Nice answer overall.  ")
    assert feedback.score is None
    assert feedback.feedback == "Nice answer overall."


# ── Service ──


@pytest.mark.asyncio
async def test_create_and_list_questions(setup):
    service, _, _ = setup
    await service.create_question("job-1", QuestionCreate(user_id="u1", question_text="Why us?"))

    questions = await service.list_questions("job-1", "u1")

    assert [q.question_text for q in questions] == ["Why us?"]


@pytest.mark.asyncio
async def test_create_question_requires_owned_job(setup):
    service, _, _ = setup
    with pytest.raises(EntityNotFoundError):
        await service.create_question(
            "job-1", QuestionCreate(user_id="someone-else", question_text="Why us?")
        )


@pytest.mark.asyncio
async def test_generate_feedback_saves_score_and_notes(setup):
    service, questions, chat = setup
    question = await service.create_question(
        "job-1",
        QuestionCreate(
            user_id="u1",
            question_text="Describe your product experience",
            answer_text="I managed a product team.",
        ),
    )

    feedback = await service.generate_feedback(question.id, "u1", "job-1")

    assert feedback.score == 7
    stored = await questions.get_by_id(question.id)
    assert stored.feedback_score == 7
    assert stored.feedback_notes == feedback.feedback
    call = chat.calls[-1]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 500
    assert "Experienced product manager" in chat.last_prompt
    assert "I managed a product team." in chat.last_prompt


@pytest.mark.asyncio
async def test_generate_feedback_without_answer(setup):
    service, _, chat = setup
    question = await service.create_question(
        "job-1", QuestionCreate(user_id="u1", question_text="Why us?")
    )

    with pytest.raises(InvalidRequestError):
        await service.generate_feedback(question.id, "u1", "job-1")
    assert chat.calls == []


@pytest.mark.asyncio
async def test_generate_feedback_rejects_mismatched_job(setup):
    service, _, _ = setup
    question = await service.create_question(
        "job-1", QuestionCreate(user_id="u1", question_text="Why us?", answer_text="Because.")
    )

    with pytest.raises(EntityNotFoundError):
        await service.generate_feedback(question.id, "u1", "job-2")


@pytest.mark.asyncio
async def test_update_answer_checks_ownership(setup):
    service, _, _ = setup
    question = await service.create_question(
        "job-1", QuestionCreate(user_id="u1", question_text="Why us?")
    )

    updated = await service.update_answer(question.id, QuestionUpdate(user_id="u1", answer_text="Draft"))
    assert updated.answer_text == "Draft"

    with pytest.raises(EntityNotFoundError):
        await service.update_answer(question.id, QuestionUpdate(user_id="u2", answer_text="Mine now"))
