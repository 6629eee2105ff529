"""Cover-letter use cases — template generation and draft analysis.

Both flows ground the model in retrieved résumé/transcript/job-description
chunks and ask for JSON. Malformed JSON falls back to canned output; provider
errors propagate.
"""

import json
import logging
from typing import Any

from applihero.application.interfaces import ChatProvider, JobRepository
from applihero.application.services.job_service import require_owned_job
from applihero.application.services.retrieval_service import RetrievalService
from applihero.domain.entities import (
    ChatMessage,
    CoverLetterAnalysis,
    CoverLetterScores,
    CoverLetterSettings,
    CoverLetterTemplate,
    Job,
)
from applihero.domain.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)

_TEMPLATE_CONTEXT_LIMIT = 8
_ANALYSIS_CONTEXT_LIMIT = 6

_TONE_GUIDANCE = {
    "professional": "formal, polished, business-like tone",
    "enthusiastic": "energetic, passionate, excited tone showing genuine interest",
    "confident": "assertive, self-assured tone highlighting strengths",
}

_LENGTH_GUIDANCE = {
    "concise": "brief and to-the-point (150-200 words)",
    "standard": "standard length (250-350 words)",
    "detailed": "comprehensive and thorough (400-500 words)",
}

_FOCUS_GUIDANCE = {
    "skills": "Lead with technical capabilities and tools",
    "experience": "Highlight past roles, internships, and work history",
    "culture-fit": "Connect personal values and interests with company culture",
    "achievements": "Showcase measurable results and accomplishments",
}

# ── Prompts: template generation ────────────────────────────────────

_TEMPLATE_SYSTEM_PROMPT = (
    "You are an expert career coach who writes cover letters using ONLY factual "
    "information from provided documents. You NEVER invent, infer, or elaborate beyond "
    "what is explicitly stated. You are extremely cautious and literal - if a detail is "
    "not explicitly in the context, you do not include it. You would rather write a "
    "shorter, more generic letter than make up a single false detail."
)

_TEMPLATE_PROMPT = """\
You are creating personalized cover letters based on a candidate's actual background. Generate 3 UNIQUE, CREATIVE cover letter {template_type}.

CANDIDATE BACKGROUND:
Name: {candidate_name}
Bio: {candidate_bio}

JOB DETAILS:
Position: {job_title} at {company}
Job Description: {job_description}

ACTUAL CANDIDATE INFORMATION FROM RESUME, TRANSCRIPT & BIO:
{context}

STYLE REQUIREMENTS (STRICTLY FOLLOW THESE):
- Tone: {tone}
- Formality Level: {formality}/100 ({formality_label})
- Length: {length}
- Focus Areas: {focus} - emphasize these aspects heavily
{focus_guidance}

CRITICAL - NO GENERIC TEMPLATES:
- Each template should have a COMPLETELY DIFFERENT structure and flow
- Some letters can start with a story, others with a bold statement, others with a question
- Make each template feel like it was written by a different person with a different style

CRITICAL - ONLY USE EXACT FACTS FROM CONTEXT (THIS IS MANDATORY):
- Every project, course, company, and achievement mentioned MUST appear exactly in the context
- DO NOT combine concepts from context to create new ideas
- DO NOT describe projects or experiences in more detail than what's in the context
- If you cannot find enough specific information in the context, write LESS or use [PLACEHOLDER]
- When in doubt, LEAVE IT OUT

For each template:
- Title: Creative, not generic
- Preview: First 100 characters
- Full content following the style requirements above
- Match score (0-100)

Format as JSON array with this structure:
[
  {{
    "id": "template-1",
    "title": "Skills-Focused Approach",
    "preview": "Dear Hiring Manager, I am writing to...",
    "fullContent": "{example_content}",
    "matchScore": 85
  }}
]

{closing_instruction}"""

_OUTLINE_EXAMPLE = (
    "Dear Hiring Manager,\\n\\n**Opening Hook**\\n[Why you're excited about this role]"
    "\\n\\n**Relevant Experience**\\n[A project or internship from your background]"
    "\\n\\n**Closing**\\n[Enthusiasm and availability]\\n\\nBest regards,\\n{name}"
)
_COMPLETE_EXAMPLE = (
    "Dear Hiring Manager,\\n\\n[Full letter content here with actual details from "
    "context]\\n\\nSincerely,\\n{name}"
)

# ── Prompts: analysis ───────────────────────────────────────────────

_ANALYSIS_SYSTEM_PROMPT = """\
You are a professional career advisor providing expert feedback. Your feedback quality determines the score:
- Exceptional letters (90-100): Compelling writing, highly relevant, specific examples, strong connection to role, professional tone
- Strong letters (80-89): Good relevance, mostly specific, clear value proposition, minor tweaks possible
- Good letters (60-79): Decent foundation, some generics mixed with specifics, needs improvement areas clear
- Adequate letters (40-59): Attempts relevance but mostly generic, significant improvements needed
- Weak letters (0-39): Lacks relevance, vague, no clear value proposition, needs major rework

Feedback quality should match letter quality: excellent letters get mostly praise with minor suggestions, weak letters get constructive critique. No arbitrary quotas."""

_ANALYSIS_PROGRESS_NOTE = (
    "\nTrack progress: Note if previous concerns have been addressed. "
    "Acknowledge improvements explicitly. Build on prior feedback."
)

_ANALYSIS_PROMPT = """\
Analyze this cover letter and provide expert feedback. Score should reflect actual quality (90-100 only for exceptional letters that are compelling, highly relevant, and well-executed).

COVER LETTER:
{content}

JOB DESCRIPTION:
{job_description}

CANDIDATE BACKGROUND:
{context}{previous_feedback}

TARGET STYLE: tone {tone}, formality {formality}/100, length {length}.

OUTPUT REQUIREMENTS:
- Return 5-8 feedback points (balance naturally based on quality, not quota).
- Each point ONE line, max 180 characters.
- Extract exact phrases DIRECTLY FROM THE LETTER and put them in quotes.
- Format positive feedback: "✓ \\"<exact phrase from letter>\\" - why this works. <impact>"
- Format constructive: "\\"<exact phrase from letter>\\" - <issue>. Fix: <specific recommendation>"
- Use exact background facts only. If missing, advise to add or remove.

Strength Indicators (0-100):
- Relevance: Demonstrates knowledge of THIS role and company.
- Professionalism: Grammar, tone, formatting, structure.
- Clarity: Easy to understand. Logical flow.
- Impact: Memorable. Would make a hiring manager want to interview?

Return JSON only:
{{
  "score": <0-100>,
  "suggestions": ["✓ \\"strength\\" - impact", "\\"area\\" - diagnosis. Fix: recommendation"],
  "scores": {{ "relevance": <0-100>, "professionalism": <0-100>, "clarity": <0-100>, "impact": <0-100> }}
}}"""


# ── JSON helpers ────────────────────────────────────────────────────


def extract_json(text: str, opening: str) -> Any | None:
    """Decode the first JSON value starting at ``opening`` ('[' or '{') in free text.

    Returns None when there is no such value or it does not parse.
    """
    decoder = json.JSONDecoder()
    start = text.find(opening)
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
            return value
        except json.JSONDecodeError:
            start = text.find(opening, start + 1)
    return None


def clamp_score(value: Any, default: int = 0) -> int:
    try:
        return max(0, min(100, int(value)))
    except (TypeError, ValueError):
        return default


def _formality_label(formality: int) -> str:
    if formality > 80:
        return "very formal"
    if formality > 60:
        return "moderately formal"
    if formality > 40:
        return "balanced casual-formal"
    return "casual and conversational"


def parse_templates(text: str) -> list[CoverLetterTemplate] | None:
    """Templates from a completion, or None when no usable JSON array is present."""
    data = extract_json(text, "[")
    if not isinstance(data, list):
        return None

    templates = []
    for i, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            continue
        full_content = str(item.get("fullContent") or item.get("full_content") or "")
        if not full_content:
            continue
        templates.append(
            CoverLetterTemplate(
                id=str(item.get("id") or f"template-{i}"),
                title=str(item.get("title") or f"Template {i}"),
                preview=str(item.get("preview") or full_content[:100]),
                full_content=full_content,
                match_score=clamp_score(item.get("matchScore", item.get("match_score"))),
            )
        )
    return templates or None


def parse_analysis(text: str) -> CoverLetterAnalysis | None:
    """Analysis from a completion, or None when no usable JSON object is present."""
    data = extract_json(text, "{")
    if not isinstance(data, dict) or "score" not in data:
        return None

    raw_scores = data.get("scores") if isinstance(data.get("scores"), dict) else {}
    suggestions = data.get("suggestions") if isinstance(data.get("suggestions"), list) else []
    return CoverLetterAnalysis(
        score=clamp_score(data.get("score")),
        suggestions=[str(s) for s in suggestions],
        scores=CoverLetterScores(
            relevance=clamp_score(raw_scores.get("relevance")),
            professionalism=clamp_score(raw_scores.get("professionalism")),
            clarity=clamp_score(raw_scores.get("clarity")),
            impact=clamp_score(raw_scores.get("impact")),
        ),
    )


# ── Fallbacks ───────────────────────────────────────────────────────


def fallback_templates(job: Job, candidate_name: str) -> list[CoverLetterTemplate]:
    title, company = job.job_title, job.company_name
    return [
        CoverLetterTemplate(
            id="template-1",
            title="Professional & Direct",
            preview=f"I am writing to express my strong interest in the {title} position...",
            full_content=(
                "Dear Hiring Manager,\n\n"
                f"I am writing to express my strong interest in the {title} position at {company}. "
                "With my background and skills, I am confident I can contribute meaningfully to your team.\n\n"
                "[Your experience and qualifications here]\n\n"
                f"I am excited about the opportunity to bring my expertise to {company} and contribute to your mission.\n\n"
                f"Best regards,\n{candidate_name}"
            ),
            match_score=80,
        ),
        CoverLetterTemplate(
            id="template-2",
            title="Skills-Emphasized",
            preview="As a skilled professional with expertise in the field, I am excited to apply...",
            full_content=(
                "Dear Hiring Manager,\n\n"
                f"As a skilled professional with relevant expertise, I am excited to apply for the {title} "
                f"position at {company}. My technical background aligns perfectly with your requirements.\n\n"
                "[Your skills and technical expertise here]\n\n"
                f"I look forward to the opportunity to discuss how my skills can benefit {company}.\n\n"
                f"Sincerely,\n{candidate_name}"
            ),
            match_score=85,
        ),
        CoverLetterTemplate(
            id="template-3",
            title="Culture-Focused",
            preview=f"I have long admired {company}'s commitment to innovation...",
            full_content=(
                "Dear Hiring Manager,\n\n"
                f"I have long admired {company}'s commitment to innovation and excellence. The {title} "
                "position represents an ideal opportunity to align my career with an organization I deeply respect.\n\n"
                "[Your values and cultural fit here]\n\n"
                f"I am excited about the possibility of contributing to {company}'s continued success.\n\n"
                f"Warm regards,\n{candidate_name}"
            ),
            match_score=78,
        ),
    ]


def fallback_analysis() -> CoverLetterAnalysis:
    return CoverLetterAnalysis(
        score=72,
        suggestions=[
            "✓ \"Strong foundation in programming languages\" - demonstrates relevant skills, "
            "showcasing your potential to contribute effectively.",
            "\"Passionate about technology\" - too generic. Fix: Replace with specific projects "
            "or achievements that show your genuine passion.",
            "✓ \"My experience with AI-powered tools\" - specific and relevant to the role requirements.",
            "\"Seeking a role where I can grow\" - vague. Fix: Be specific about what aspects of "
            "THIS company and role align with your goals.",
            "✓ \"Contributed to a team project\" - good, but could strengthen: Add specific "
            "measurable outcomes or impact.",
        ],
        scores=CoverLetterScores(relevance=75, professionalism=82, clarity=78, impact=68),
    )


class CoverLetterService:
    """Generates cover-letter templates and scores drafts for one job."""

    def __init__(
        self,
        chat_provider: ChatProvider,
        retrieval_service: RetrievalService,
        job_repository: JobRepository,
        *,
        model: str = "",
    ):
        self._chat_provider = chat_provider
        self._retrieval = retrieval_service
        self._job_repo = job_repository
        self._model = model

    async def generate_templates(
        self,
        job_id: str,
        user_id: str,
        *,
        candidate_name: str = "",
        candidate_bio: str | None = None,
        style: str = "complete",
        settings: CoverLetterSettings | None = None,
    ) -> list[CoverLetterTemplate]:
        """Three differently structured letters (or outlines) grounded in the user's documents."""
        if style not in ("outline", "complete"):
            raise InvalidRequestError(f"Unknown template style '{style}'")
        settings = settings or CoverLetterSettings()
        job = await require_owned_job(self._job_repo, job_id, user_id)

        context = await self._retrieval.retrieve_context(
            f"Generate cover letter for {job.job_title} at {job.company_name}",
            user_id=user_id,
            job_id=job_id,
            limit=_TEMPLATE_CONTEXT_LIMIT,
        )

        is_outline = style == "outline"
        name = candidate_name.strip() or "[Your Name]"
        example = _OUTLINE_EXAMPLE if is_outline else _COMPLETE_EXAMPLE
        prompt = _TEMPLATE_PROMPT.format(
            template_type="TEMPLATES (outlines with placeholders)" if is_outline else "COMPLETE LETTERS",
            candidate_name=name,
            candidate_bio=candidate_bio or "N/A",
            job_title=job.job_title,
            company=job.company_name,
            job_description=job.job_description or "",
            context=context,
            tone=_TONE_GUIDANCE.get(settings.tone, _TONE_GUIDANCE["professional"]),
            formality=settings.formality,
            formality_label=_formality_label(settings.formality),
            length=_LENGTH_GUIDANCE.get(settings.length, _LENGTH_GUIDANCE["standard"]),
            focus=", ".join(settings.focus),
            focus_guidance="\n".join(
                f"- {_FOCUS_GUIDANCE[f]}" for f in settings.focus if f in _FOCUS_GUIDANCE
            ),
            example_content=example.format(name=name),
            closing_instruction=(
                "Make the templates clear, actionable outlines that guide the user without writing everything for them."
                if is_outline
                else "Make the letters professional, personalized, and compelling using specific details from the job description and resume context above."
            ),
        )

        result = await self._chat_provider.complete(
            messages=[
                ChatMessage(role="system", content=_TEMPLATE_SYSTEM_PROMPT),
                ChatMessage(role="user", content=prompt),
            ],
            model=self._model,
            temperature=0.3,
        )

        templates = parse_templates(result.content or "")
        if templates is None:
            logger.warning("No JSON array in template completion for job %s, using fallback", job_id)
            return fallback_templates(job, name)
        logger.info("Parsed %d cover letter template(s) for job %s", len(templates), job_id)
        return templates

    async def analyze(
        self,
        job_id: str,
        user_id: str,
        content: str,
        *,
        settings: CoverLetterSettings | None = None,
        previous_suggestions: list[str] | None = None,
    ) -> CoverLetterAnalysis:
        """Score a draft and return line-level suggestions."""
        if not content or not content.strip():
            raise InvalidRequestError("Cover letter content must not be empty")
        settings = settings or CoverLetterSettings()
        job = await require_owned_job(self._job_repo, job_id, user_id)
        job_description = job.job_description or job.display_title

        context = await self._retrieval.retrieve_context(
            f"Analyze cover letter feedback for {job_description}",
            user_id=user_id,
            job_id=job_id,
            limit=_ANALYSIS_CONTEXT_LIMIT,
        )

        system_prompt = _ANALYSIS_SYSTEM_PROMPT
        previous_block = ""
        if previous_suggestions:
            system_prompt += _ANALYSIS_PROGRESS_NOTE
            previous_block = (
                "\n\nPREVIOUS FEEDBACK (for context and to track improvements):\n"
                + "\n".join(previous_suggestions)
            )

        prompt = _ANALYSIS_PROMPT.format(
            content=content,
            job_description=job_description,
            context=context,
            previous_feedback=previous_block,
            tone=settings.tone,
            formality=settings.formality,
            length=settings.length,
        )

        result = await self._chat_provider.complete(
            messages=[
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=prompt),
            ],
            model=self._model,
            temperature=0.6,
        )

        analysis = parse_analysis(result.content or "")
        if analysis is None:
            logger.warning("No JSON object in analysis completion for job %s, using fallback", job_id)
            return fallback_analysis()
        return analysis
