"""Résumé optimizer endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from applihero.application.schemas import (
    ResumeFeedbackRequest,
    ResumeFeedbackResponse,
    ResumeSuggestionsRequest,
    ResumeSuggestionsResponse,
)
from applihero.application.services import ResumeOptimizerService
from applihero.domain.exceptions import (
    ChatProviderError,
    EmbeddingProviderError,
    EntityNotFoundError,
    InvalidRequestError,
)
from applihero.infrastructure.dependencies import get_resume_optimizer_service
from applihero.presentation.api.v1.endpoints.errors import upstream_error

router = APIRouter(prefix="/resume-optimizer", tags=["Resume Optimizer"])


@router.post("/suggestions", response_model=ResumeSuggestionsResponse)
async def suggestions(
    request: ResumeSuggestionsRequest,
    service: ResumeOptimizerService = Depends(get_resume_optimizer_service),
) -> ResumeSuggestionsResponse:
    """Suggest concrete edits that tailor the résumé to the job."""
    try:
        items = await service.suggest(request.job_id, request.user_id, request.resume_text)
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ChatProviderError, EmbeddingProviderError) as e:
        raise upstream_error(e)
    return ResumeSuggestionsResponse(suggestions=items)


@router.post("/feedback", response_model=ResumeFeedbackResponse)
async def feedback(
    request: ResumeFeedbackRequest,
    service: ResumeOptimizerService = Depends(get_resume_optimizer_service),
) -> ResumeFeedbackResponse:
    """Score the résumé for the job, building on feedback given to earlier versions."""
    try:
        result = await service.feedback(request.job_id, request.user_id, request.resume_text)
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ChatProviderError, EmbeddingProviderError) as e:
        raise upstream_error(e)
    return ResumeFeedbackResponse.model_validate(result)
