from .chat_message import ChatMessage, TokenUsage, ChatCompletionResult
from .coach_message import CoachMessage
from .cover_letter import (
    CoverLetterAnalysis,
    CoverLetterScores,
    CoverLetterSettings,
    CoverLetterTemplate,
)
from .document_chunk import DocumentChunk, RetrievedChunk
from .job import Job
from .job_document import DocumentType, JobDocument
from .question import Question, QuestionFeedback
from .resume_version import ResumeFeedback, ResumeImprovement, ResumeVersion

__all__ = [
    "ChatMessage",
    "TokenUsage",
    "ChatCompletionResult",
    "CoachMessage",
    "CoverLetterAnalysis",
    "CoverLetterScores",
    "CoverLetterSettings",
    "CoverLetterTemplate",
    "DocumentChunk",
    "RetrievedChunk",
    "Job",
    "DocumentType",
    "JobDocument",
    "Question",
    "QuestionFeedback",
    "ResumeFeedback",
    "ResumeImprovement",
    "ResumeVersion",
]
