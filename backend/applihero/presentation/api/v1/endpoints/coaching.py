"""Coach chat and application question endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from applihero.application.schemas import (
    CoachChatRequest,
    CoachChatResponse,
    CoachMessageResponse,
    QuestionCreate,
    QuestionFeedbackRequest,
    QuestionFeedbackResponse,
    QuestionResponse,
    QuestionUpdate,
)
from applihero.application.services import CoachChatService, QuestionService
from applihero.domain.exceptions import (
    ChatProviderError,
    EmbeddingProviderError,
    EntityNotFoundError,
    InvalidRequestError,
)
from applihero.infrastructure.dependencies import get_coach_chat_service, get_question_service
from applihero.presentation.api.v1.endpoints.errors import upstream_error

router = APIRouter(tags=["Coaching"])


# ── Coach chat ───────────────────────────────────────────────────────


@router.post("/jobs/{job_id}/chat", response_model=CoachChatResponse)
async def chat(
    job_id: str,
    request: CoachChatRequest,
    service: CoachChatService = Depends(get_coach_chat_service),
) -> CoachChatResponse:
    """Ask the coach a question about this job."""
    try:
        reply = await service.reply(job_id, request.user_id, request.message)
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ChatProviderError, EmbeddingProviderError) as e:
        raise upstream_error(e)
    return CoachChatResponse(reply=reply)


@router.get("/jobs/{job_id}/chat", response_model=list[CoachMessageResponse])
async def chat_history(
    job_id: str,
    user_id: str = Query(..., min_length=1),
    service: CoachChatService = Depends(get_coach_chat_service),
) -> list[CoachMessageResponse]:
    try:
        messages = await service.history(job_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [CoachMessageResponse.model_validate(m, from_attributes=True) for m in messages]


# ── Questions ────────────────────────────────────────────────────────


@router.get("/jobs/{job_id}/questions", response_model=list[QuestionResponse])
async def list_questions(
    job_id: str,
    user_id: str = Query(..., min_length=1),
    service: QuestionService = Depends(get_question_service),
) -> list[QuestionResponse]:
    try:
        questions = await service.list_questions(job_id, user_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [QuestionResponse.model_validate(q, from_attributes=True) for q in questions]


@router.post(
    "/jobs/{job_id}/questions",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_question(
    job_id: str,
    data: QuestionCreate,
    service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    try:
        question = await service.create_question(job_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return QuestionResponse.model_validate(question, from_attributes=True)


@router.put("/questions/{question_id}", response_model=QuestionResponse)
async def update_answer(
    question_id: str,
    data: QuestionUpdate,
    service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    try:
        question = await service.update_answer(question_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return QuestionResponse.model_validate(question, from_attributes=True)


@router.post("/questions/{question_id}/feedback", response_model=QuestionFeedbackResponse)
async def question_feedback(
    question_id: str,
    request: QuestionFeedbackRequest,
    service: QuestionService = Depends(get_question_service),
) -> QuestionFeedbackResponse:
    """Score the saved answer (1-10) with bullet-point feedback."""
    try:
        feedback = await service.generate_feedback(question_id, request.user_id, request.job_id)
    except InvalidRequestError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (ChatProviderError, EmbeddingProviderError) as e:
        raise upstream_error(e)
    return QuestionFeedbackResponse(score=feedback.score, feedback=feedback.feedback)
