from .coaching import (
    CoachChatRequest,
    CoachChatResponse,
    CoachMessageResponse,
    QuestionCreate,
    QuestionUpdate,
    QuestionResponse,
    QuestionFeedbackRequest,
    QuestionFeedbackResponse,
    ResumeSuggestionsRequest,
    ResumeSuggestionsResponse,
    ResumeFeedbackRequest,
    ResumeImprovementSchema,
    ResumeFeedbackResponse,
)
from .cover_letters import (
    CoverLetterSettingsSchema,
    CoverLetterTemplatesRequest,
    CoverLetterTemplateSchema,
    CoverLetterTemplatesResponse,
    CoverLetterFeedbackRequest,
    CoverLetterScoresSchema,
    CoverLetterAnalysisResponse,
)
from .documents import DocumentCreate, DocumentUpdate, DocumentResponse
from .jobs import (
    JobCreate,
    JobUpdate,
    JobResponse,
    JobIngestRequest,
    DocumentIngestionResult,
    JobIngestionReport,
)
from .retrieval import (
    RetrievalSearchRequest,
    RetrievedChunkSchema,
    RetrievalSearchResponse,
)

__all__ = [
    "CoachChatRequest",
    "CoachChatResponse",
    "CoachMessageResponse",
    "QuestionCreate",
    "QuestionUpdate",
    "QuestionResponse",
    "QuestionFeedbackRequest",
    "QuestionFeedbackResponse",
    "ResumeSuggestionsRequest",
    "ResumeSuggestionsResponse",
    "ResumeFeedbackRequest",
    "ResumeImprovementSchema",
    "ResumeFeedbackResponse",
    "CoverLetterSettingsSchema",
    "CoverLetterTemplatesRequest",
    "CoverLetterTemplateSchema",
    "CoverLetterTemplatesResponse",
    "CoverLetterFeedbackRequest",
    "CoverLetterScoresSchema",
    "CoverLetterAnalysisResponse",
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentResponse",
    "JobCreate",
    "JobUpdate",
    "JobResponse",
    "JobIngestRequest",
    "DocumentIngestionResult",
    "JobIngestionReport",
    "RetrievalSearchRequest",
    "RetrievedChunkSchema",
    "RetrievalSearchResponse",
]
