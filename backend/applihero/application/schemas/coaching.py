"""Pydantic schemas for coach chat, application questions and the résumé optimizer."""

from datetime import datetime

from pydantic import BaseModel, Field


# ── Coach chat ───────────────────────────────────────────────────────


class CoachChatRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, examples=["What should I highlight for this role?"])


class CoachChatResponse(BaseModel):
    reply: str


class CoachMessageResponse(BaseModel):
    role: str
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ── Questions ────────────────────────────────────────────────────────


class QuestionCreate(BaseModel):
    """Schema for adding an application question to a job."""

    user_id: str = Field(..., min_length=1, max_length=255)
    question_text: str = Field(..., min_length=1, examples=["Why do you want to work here?"])
    answer_text: str | None = None


class QuestionUpdate(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    answer_text: str


class QuestionResponse(BaseModel):
    id: str
    job_id: str
    question_text: str
    answer_text: str | None
    feedback_score: int | None
    feedback_notes: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class QuestionFeedbackRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    job_id: str = Field(..., min_length=1)


class QuestionFeedbackResponse(BaseModel):
    score: int | None = Field(None, description="1-10, null when the model gave no score")
    feedback: str

    model_config = {"from_attributes": True}


# ── Résumé optimizer ─────────────────────────────────────────────────


class ResumeSuggestionsRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    job_id: str = Field(..., min_length=1)
    resume_text: str = Field(..., min_length=1)


class ResumeSuggestionsResponse(BaseModel):
    suggestions: list[str] = []


class ResumeFeedbackRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    job_id: str = Field(..., min_length=1)
    resume_text: str = Field(..., min_length=1)


class ResumeImprovementSchema(BaseModel):
    section: str
    suggestion: str
    reason: str = ""

    model_config = {"from_attributes": True}


class ResumeFeedbackResponse(BaseModel):
    """Scored review of a résumé for one job (0–100)."""

    score: int
    summary: str = ""
    strengths: list[str] = []
    improvements: list[ResumeImprovementSchema] = []
    keyword_gaps: list[str] = []
    priority_changes: list[str] = []

    model_config = {"from_attributes": True}
