"""Domain entities for résumé versions and their AI feedback."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class ResumeImprovement:
    section: str
    suggestion: str
    reason: str = ""


@dataclass
class ResumeFeedback:
    """Scored review of a résumé against one job (score 0–100)."""

    score: int
    summary: str = ""
    strengths: list[str] = field(default_factory=list)
    improvements: list[ResumeImprovement] = field(default_factory=list)
    keyword_gaps: list[str] = field(default_factory=list)
    priority_changes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ResumeVersion:
    """A résumé text submitted for one job, with the feedback it received.

    ``feedback`` holds the JSON object the model returned; earlier versions'
    feedback is fed back into the next review of the same job.
    """

    job_id: str
    user_id: str
    resume_text: str
    feedback_score: int | None = None
    feedback: dict[str, Any] | None = None
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
