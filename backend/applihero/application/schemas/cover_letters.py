"""Pydantic schemas for cover-letter generation and analysis."""

from typing import Literal

from pydantic import BaseModel, Field


class CoverLetterSettingsSchema(BaseModel):
    """Style knobs shared by generation and analysis."""

    tone: Literal["professional", "enthusiastic", "confident"] = "professional"
    formality: int = Field(70, ge=0, le=100)
    length: Literal["concise", "standard", "detailed"] = "standard"
    focus: list[str] = Field(default_factory=lambda: ["skills", "experience"])

    model_config = {"from_attributes": True}


class CoverLetterTemplatesRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    job_id: str = Field(..., min_length=1)
    candidate_name: str = Field("", max_length=255, examples=["Jane Doe"])
    candidate_bio: str | None = None
    style: Literal["outline", "complete"] = "complete"
    settings: CoverLetterSettingsSchema = Field(default_factory=CoverLetterSettingsSchema)


class CoverLetterTemplateSchema(BaseModel):
    id: str
    title: str
    preview: str
    full_content: str
    match_score: int = 0

    model_config = {"from_attributes": True}


class CoverLetterTemplatesResponse(BaseModel):
    templates: list[CoverLetterTemplateSchema] = []


class CoverLetterFeedbackRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    job_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    settings: CoverLetterSettingsSchema = Field(default_factory=CoverLetterSettingsSchema)
    previous_suggestions: list[str] = Field(
        default_factory=list, description="Suggestions from the previous analysis, to track progress"
    )


class CoverLetterScoresSchema(BaseModel):
    relevance: int = 0
    professionalism: int = 0
    clarity: int = 0
    impact: int = 0

    model_config = {"from_attributes": True}


class CoverLetterAnalysisResponse(BaseModel):
    score: int
    suggestions: list[str] = []
    scores: CoverLetterScoresSchema

    model_config = {"from_attributes": True}
