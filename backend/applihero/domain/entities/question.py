"""Domain entity for application questions and their AI feedback."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Question:
    """An application question for a job, with the user's draft answer."""

    job_id: str
    question_text: str
    answer_text: str | None = None
    feedback_score: int | None = None  # 1–10
    feedback_notes: str | None = None
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def record_feedback(self, score: int | None, notes: str) -> None:
        self.feedback_score = score
        self.feedback_notes = notes
        self.updated_at = datetime.now(timezone.utc)

    def update_answer(self, answer_text: str) -> None:
        self.answer_text = answer_text
        self.updated_at = datetime.now(timezone.utc)


@dataclass
class QuestionFeedback:
    """Parsed result of a feedback completion."""

    score: int | None
    feedback: str
