"""Cover-letter template generation and draft analysis endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from applihero.application.schemas import (
    CoverLetterAnalysisResponse,
    CoverLetterFeedbackRequest,
    CoverLetterSettingsSchema,
    CoverLetterTemplateSchema,
    CoverLetterTemplatesRequest,
    CoverLetterTemplatesResponse,
)
from applihero.application.services import CoverLetterService
from applihero.domain.entities import CoverLetterSettings
from applihero.domain.exceptions import (
    ChatProviderError,
    EmbeddingProviderError,
    EntityNotFoundError,
    InvalidRequestError,
)
from applihero.infrastructure.dependencies import get_cover_letter_service
from applihero.presentation.api.v1.endpoints.errors import upstream_error

router = APIRouter(prefix="/cover-letters", tags=["Cover Letters"])


def _to_settings(schema: CoverLetterSettingsSchema) -> CoverLetterSettings:
    return CoverLetterSettings(
        tone=schema.tone,
        formality=schema.formality,
        length=schema.length,
        focus=list(schema.focus),
    )


@router.post("/templates", response_model=CoverLetterTemplatesResponse)
async def generate_templates(
    request: CoverLetterTemplatesRequest,
    service: CoverLetterService = Depends(get_cover_letter_service),
) -> CoverLetterTemplatesResponse:
    """Generate three cover letters (or outlines) grounded in the user's documents."""
    try:
        templates = await service.generate_templates(
            request.job_id,
            request.user_id,
            candidate_name=request.candidate_name,
            candidate_bio=request.candidate_bio,
            style=request.style,
            settings=_to_settings(request.settings),
        )
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ChatProviderError, EmbeddingProviderError) as e:
        raise upstream_error(e)
    return CoverLetterTemplatesResponse(
        templates=[CoverLetterTemplateSchema.model_validate(t, from_attributes=True) for t in templates]
    )


@router.post("/feedback", response_model=CoverLetterAnalysisResponse)
async def analyze(
    request: CoverLetterFeedbackRequest,
    service: CoverLetterService = Depends(get_cover_letter_service),
) -> CoverLetterAnalysisResponse:
    """Score a draft (0-100) with quoted, line-level suggestions."""
    try:
        analysis = await service.analyze(
            request.job_id,
            request.user_id,
            request.content,
            settings=_to_settings(request.settings),
            previous_suggestions=request.previous_suggestions,
        )
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ChatProviderError, EmbeddingProviderError) as e:
        raise upstream_error(e)
    return CoverLetterAnalysisResponse.model_validate(analysis, from_attributes=True)
