"""Application questions and AI feedback on the user's answers."""

import logging
import re

from applihero.application.interfaces import ChatProvider, JobRepository, QuestionRepository
from applihero.application.schemas.coaching import QuestionCreate, QuestionUpdate
from applihero.application.services.job_service import require_owned_job
from applihero.application.services.retrieval_service import RetrievalService, assemble_context
from applihero.domain.entities import ChatMessage, Question, QuestionFeedback
from applihero.domain.exceptions import EntityNotFoundError, InvalidRequestError

logger = logging.getLogger(__name__)

_FEEDBACK_CONTEXT_LIMIT = 5

_FEEDBACK_SYSTEM_PROMPT = (
    "You are an expert job application coach who provides specific, actionable feedback."
)

_FEEDBACK_PROMPT = """\
You are an expert job application coach. Review this application answer and provide constructive feedback.

CONTEXT (Resume, Transcript, Job Description):
{context}

QUESTION:
{question}

CANDIDATE'S ANSWER:
{answer}

TASK:
1. Give a score from 1-10 (10 being excellent)
2. Provide 3-5 specific, actionable bullet points of feedback
3. Focus on: relevance to job, use of specific examples, clarity, and alignment with candidate's background
4. Be constructive and encouraging

FORMAT YOUR RESPONSE EXACTLY LIKE THIS:
Score: X/10

Feedback:
• [First point]
• [Second point]
• [Third point]
• [Fourth point]
• [Fifth point]
"""

_SCORE_RE = re.compile(r"Score:\s*(\d+)", re.IGNORECASE)
_FEEDBACK_RE = re.compile(r"Feedback:(.*)", re.IGNORECASE | re.DOTALL)


def parse_feedback(text: str) -> QuestionFeedback:
    """Pull ``Score: N`` and the ``Feedback:`` section out of a completion.

    Without a score marker the score is None; without a feedback marker the
    whole text is kept as the feedback.
    """
    score_match = _SCORE_RE.search(text)
    score = int(score_match.group(1)) if score_match else None

    feedback_match = _FEEDBACK_RE.search(text)
    feedback = feedback_match.group(1).strip() if feedback_match else text.strip()
    return QuestionFeedback(score=score, feedback=feedback)


class QuestionService:
    """Question CRUD plus retrieval-grounded answer feedback."""

    def __init__(
        self,
        question_repository: QuestionRepository,
        job_repository: JobRepository,
        chat_provider: ChatProvider,
        retrieval_service: RetrievalService,
        *,
        model: str = "",
    ):
        self._repository = question_repository
        self._job_repo = job_repository
        self._chat_provider = chat_provider
        self._retrieval = retrieval_service
        self._model = model

    async def list_questions(self, job_id: str, user_id: str) -> list[Question]:
        await require_owned_job(self._job_repo, job_id, user_id)
        return await self._repository.list_for_job(job_id)

    async def create_question(self, job_id: str, data: QuestionCreate) -> Question:
        await require_owned_job(self._job_repo, job_id, data.user_id)
        question = Question(
            job_id=job_id,
            question_text=data.question_text,
            answer_text=data.answer_text,
        )
        return await self._repository.create(question)

    async def update_answer(self, question_id: str, data: QuestionUpdate) -> Question:
        question = await self._get_owned_question(question_id, data.user_id)
        question.update_answer(data.answer_text)
        return await self._repository.update(question)

    async def generate_feedback(
        self, question_id: str, user_id: str, job_id: str
    ) -> QuestionFeedback:
        """Score the stored answer against the user's background and save the result.

        Raises:
            EntityNotFoundError: Unknown question, or not visible to the user.
            InvalidRequestError: There is no answer to give feedback on.
        """
        question = await self._get_owned_question(question_id, user_id)
        if question.job_id != job_id:
            raise EntityNotFoundError("Question", question_id)
        if not question.answer_text or not question.answer_text.strip():
            raise InvalidRequestError("No answer to provide feedback on")

        results = await self._retrieval.retrieve(
            f"{question.question_text} {question.answer_text}",
            user_id=user_id,
            job_id=job_id,
            limit=_FEEDBACK_CONTEXT_LIMIT,
        )
        prompt = _FEEDBACK_PROMPT.format(
            context=assemble_context(results, self._retrieval.context_max_chars),
            question=question.question_text,
            answer=question.answer_text,
        )

        result = await self._chat_provider.complete(
            messages=[
                ChatMessage(role="system", content=_FEEDBACK_SYSTEM_PROMPT),
                ChatMessage(role="user", content=prompt),
            ],
            model=self._model,
            temperature=0.7,
            max_tokens=500,
        )

        feedback = parse_feedback(result.content or "")
        question.record_feedback(feedback.score, feedback.feedback)
        await self._repository.update(question)
        logger.info("Feedback for question %s: score=%s", question_id, feedback.score)
        return feedback

    async def _get_owned_question(self, question_id: str, user_id: str) -> Question:
        question = await self._repository.get_by_id(question_id)
        if question is None:
            raise EntityNotFoundError("Question", question_id)
        # Ownership flows through the job.
        job = await self._job_repo.get_by_id(question.job_id)
        if job is None or job.user_id != user_id:
            raise EntityNotFoundError("Question", question_id)
        return question
