"""Coach chat use case — retrieval-augmented answers scoped to one job."""

import logging

from applihero.application.interfaces import ChatProvider, CoachMessageRepository, JobRepository
from applihero.application.services.job_service import require_owned_job
from applihero.application.services.prompts import SYSTEM_COACH, build_coach_prompt
from applihero.application.services.retrieval_service import RetrievalService
from applihero.domain.entities import ChatMessage, CoachMessage
from applihero.domain.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)


def format_transcript(messages: list[CoachMessage]) -> str:
    """Render stored turns as "Coach:"/"User:" lines separated by blank lines."""
    return "\n\n".join(
        f"{'Coach' if m.role == 'assistant' else 'User'}: {m.content}" for m in messages
    )


class CoachChatService:
    """Answers the user's questions about a job using their own documents as context."""

    def __init__(
        self,
        chat_provider: ChatProvider,
        retrieval_service: RetrievalService,
        job_repository: JobRepository,
        message_repository: CoachMessageRepository,
        *,
        model: str = "",
        history_limit: int = 20,
    ):
        self._chat_provider = chat_provider
        self._retrieval = retrieval_service
        self._job_repo = job_repository
        self._message_repo = message_repository
        self._model = model
        self._history_limit = history_limit

    async def reply(self, job_id: str, user_id: str, message: str) -> str:
        """Produce the coach's reply and record both turns.

        Raises:
            InvalidRequestError: Blank message.
            EntityNotFoundError: Unknown job, or a job of another user.
            ChatProviderError / EmbeddingProviderError: Upstream failures.
        """
        if not message or not message.strip():
            raise InvalidRequestError("Empty message")
        await require_owned_job(self._job_repo, job_id, user_id)

        history = await self._message_repo.list_for_job(job_id, limit=self._history_limit)
        context = await self._retrieval.retrieve_context(message, user_id=user_id, job_id=job_id)

        prompt = build_coach_prompt(
            question=message,
            context=context,
            previous_messages=format_transcript(history),
        )
        result = await self._chat_provider.complete(
            messages=[
                ChatMessage(role="system", content=SYSTEM_COACH),
                ChatMessage(role="user", content=prompt),
            ],
            model=self._model,
        )
        reply = result.content or ""
        logger.info(
            "Coach reply for job %s: history=%d context_chars=%d reply_chars=%d",
            job_id,
            len(history),
            len(context),
            len(reply),
        )

        try:
            await self._message_repo.add_many(
                [
                    CoachMessage(job_id=job_id, role="user", content=message),
                    CoachMessage(job_id=job_id, role="assistant", content=reply),
                ]
            )
        except Exception:
            # The reply is still returned when history cannot be saved.
            logger.exception("Coach message persistence failed for job %s", job_id)

        return reply

    async def history(self, job_id: str, user_id: str, limit: int = 100) -> list[CoachMessage]:
        await require_owned_job(self._job_repo, job_id, user_id)
        return await self._message_repo.list_for_job(job_id, limit=limit)
