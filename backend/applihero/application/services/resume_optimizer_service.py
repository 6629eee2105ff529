"""Résumé tailoring suggestions and scored résumé feedback for a specific job."""

import json
import logging
from typing import Any

from applihero.application.interfaces import ChatProvider, JobRepository, ResumeVersionRepository
from applihero.application.services.cover_letter_service import clamp_score, extract_json
from applihero.application.services.job_service import require_owned_job
from applihero.application.services.retrieval_service import RetrievalService
from applihero.domain.entities import (
    ChatMessage,
    ResumeFeedback,
    ResumeImprovement,
    ResumeVersion,
)
from applihero.domain.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)

_CONTEXT_LIMIT = 6

_SYSTEM_PROMPT = """\
You are an expert career coach specializing in resume optimization. Your job is to analyze a resume and provide specific, actionable suggestions for tailoring it to a particular job. Focus on:
- Highlighting relevant experiences and skills
- Reframing accomplishments to match job requirements
- Identifying gaps and suggesting improvements
- Reorganizing sections for impact
- Using job-relevant keywords and language
Keep suggestions specific, actionable, and concise."""

_USER_PROMPT = """\
Analyze this resume and provide 6-8 specific suggestions for tailoring it to the following job. Be concrete and actionable.

JOB DETAILS:
Position: {job_title} at {company}
Description: {job_description}

RESUME:
{resume_text}

ADDITIONAL CONTEXT (from background):
{context}

Provide specific, actionable suggestions in this format:
- "Section or phrase" -> Suggestion for how to improve it. Why: [reason related to the job]

Focus on:
1. Which existing experiences to emphasize
2. Which skills to highlight or add
3. How to reframe accomplishments to match job requirements
4. What keywords from the job description should appear in the resume
5. Any gaps or missing information
6. How to reorganize for better impact

Return as a simple bulleted list (no JSON)."""


_FEEDBACK_SYSTEM_PROMPT = """\
You are an expert resume reviewer and career coach. Analyze the resume and provide constructive feedback for the specific job position. Focus on:
- How well the resume aligns with job requirements (key skills, experiences, keywords; be specific based on the job description and context)
- Specific improvements that would increase chances
- Skills and experiences that should be emphasized
- Any gaps or missing information
- Overall effectiveness rating (0-100, where 100 means perfect alignment and 0 means no alignment)

Provide feedback in JSON format with score and specific suggestions. The score should always be between 0 and 100, and should leave room for improvement even if the resume is strong."""

_FEEDBACK_USER_PROMPT = """\
Analyze this resume for the following job position and provide detailed feedback.

JOB DETAILS:
Position: {job_title} at {company}
Description: {job_description}

RESUME:
{resume_text}

ADDITIONAL CONTEXT (from background):
{context}

This is the past feedback given on previous versions of this resume for this job. Ensure that your feedback builds upon or addresses these previous points while also addressing any new changes if necessary. If there are no changes in the work, the score should be similar to before. If you see some improvement in these areas, then adjust the score accordingly:
{past_feedback}

Provide feedback in this JSON format:
{{
  "score": <0-100>,
  "summary": "One sentence overall assessment",
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "improvements": [
    {{ "section": "section name or phrase", "suggestion": "specific improvement", "reason": "why this matters for the job" }}
  ],
  "keyword_gaps": ["keyword 1", "keyword 2"],
  "priority_changes": ["top change 1", "top change 2"]
}}"""


def parse_suggestions(text: str) -> list[str]:
    """Keep only ``-`` bullet lines, without the bullet."""
    suggestions = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith("-"):
            continue
        suggestion = stripped[1:].strip()
        if suggestion:
            suggestions.append(suggestion)
    return suggestions


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v not in (None, "")]


def parse_resume_feedback(text: str) -> ResumeFeedback | None:
    """Feedback from a completion, or None when no usable JSON object is present."""
    data = extract_json(text, "{")
    if not isinstance(data, dict) or "score" not in data:
        return None

    improvements = []
    for item in data.get("improvements") or []:
        if isinstance(item, dict) and item.get("suggestion"):
            improvements.append(
                ResumeImprovement(
                    section=str(item.get("section") or ""),
                    suggestion=str(item["suggestion"]),
                    reason=str(item.get("reason") or ""),
                )
            )
        elif isinstance(item, str) and item:
            improvements.append(ResumeImprovement(section="", suggestion=item))

    return ResumeFeedback(
        score=clamp_score(data.get("score")),
        summary=str(data.get("summary") or ""),
        strengths=_strings(data.get("strengths")),
        improvements=improvements,
        keyword_gaps=_strings(data.get("keyword_gaps")),
        priority_changes=_strings(data.get("priority_changes")),
    )


def fallback_resume_feedback() -> ResumeFeedback:
    return ResumeFeedback(score=0, summary="Unable to parse feedback")


def format_past_feedback(versions: list[ResumeVersion]) -> str:
    """Earlier feedback, oldest first, separated by ``---``; " None." when there is none."""
    past = [json.dumps(v.feedback) for v in versions if v.feedback]
    if not past:
        return " None."
    return "PAST FEEDBACK:\n" + "\n---\n".join(past)


class ResumeOptimizerService:
    def __init__(
        self,
        chat_provider: ChatProvider,
        retrieval_service: RetrievalService,
        job_repository: JobRepository,
        version_repository: ResumeVersionRepository,
        *,
        model: str = "",
    ):
        self._chat_provider = chat_provider
        self._retrieval = retrieval_service
        self._job_repo = job_repository
        self._version_repo = version_repository
        self._model = model

    async def suggest(self, job_id: str, user_id: str, resume_text: str) -> list[str]:
        """Suggest how to tailor ``resume_text`` to the job."""
        if not resume_text or not resume_text.strip():
            raise InvalidRequestError("resume_text is required")
        job = await require_owned_job(self._job_repo, job_id, user_id)

        context = await self._retrieval.retrieve_context(
            f"Resume optimization for {job.job_title} at {job.company_name}",
            user_id=user_id,
            job_id=job_id,
            limit=_CONTEXT_LIMIT,
        )
        prompt = _USER_PROMPT.format(
            job_title=job.job_title,
            company=job.company_name,
            job_description=job.job_description or "",
            resume_text=resume_text,
            context=context,
        )

        result = await self._chat_provider.complete(
            messages=[
                ChatMessage(role="system", content=_SYSTEM_PROMPT),
                ChatMessage(role="user", content=prompt),
            ],
            model=self._model,
            temperature=0.5,
        )
        suggestions = parse_suggestions(result.content or "")
        logger.info("Generated %d resume suggestion(s) for job %s", len(suggestions), job_id)
        return suggestions

    async def feedback(self, job_id: str, user_id: str, resume_text: str) -> ResumeFeedback:
        """Score ``resume_text`` against the job and record it as a new version.

        Feedback stored on earlier versions for the same job and user is part
        of the prompt. Unparseable output yields a zero-score result, which is
        returned but not stored.

        Raises:
            InvalidRequestError: Blank résumé.
            EntityNotFoundError: Unknown job, or a job of another user.
            ChatProviderError / EmbeddingProviderError: Upstream failures.
        """
        if not resume_text or not resume_text.strip():
            raise InvalidRequestError("resume_text is required")
        job = await require_owned_job(self._job_repo, job_id, user_id)

        previous = await self._version_repo.list_for_job(job_id, user_id)
        context = await self._retrieval.retrieve_context(
            f"Resume feedback for {job.job_title} at {job.company_name}",
            user_id=user_id,
            job_id=job_id,
            limit=_CONTEXT_LIMIT,
        )
        prompt = _FEEDBACK_USER_PROMPT.format(
            job_title=job.job_title,
            company=job.company_name,
            job_description=job.job_description or "",
            resume_text=resume_text,
            context=context,
            past_feedback=format_past_feedback(previous),
        )

        result = await self._chat_provider.complete(
            messages=[
                ChatMessage(role="system", content=_FEEDBACK_SYSTEM_PROMPT),
                ChatMessage(role="user", content=prompt),
            ],
            model=self._model,
            temperature=0.5,
        )

        feedback = parse_resume_feedback(result.content or "")
        if feedback is None:
            logger.warning("Unparseable resume feedback for job %s, using fallback", job_id)
            return fallback_resume_feedback()

        await self._version_repo.create(
            ResumeVersion(
                job_id=job_id,
                user_id=user_id,
                resume_text=resume_text,
                feedback_score=feedback.score,
                feedback=feedback.to_dict(),
            )
        )
        logger.info(
            "Resume feedback for job %s: score=%d previous_versions=%d",
            job_id,
            feedback.score,
            len(previous),
        )
        return feedback
