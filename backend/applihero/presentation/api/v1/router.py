"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from applihero.presentation.api.v1.endpoints.health import router as health_router
from applihero.presentation.api.v1.endpoints.jobs import router as jobs_router
from applihero.presentation.api.v1.endpoints.documents import router as documents_router
from applihero.presentation.api.v1.endpoints.retrieval import router as retrieval_router
from applihero.presentation.api.v1.endpoints.coaching import router as coaching_router
from applihero.presentation.api.v1.endpoints.resume_optimizer import router as resume_router
from applihero.presentation.api.v1.endpoints.cover_letters import router as cover_letters_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(jobs_router)
router.include_router(documents_router)
router.include_router(retrieval_router)
router.include_router(coaching_router)
router.include_router(resume_router)
router.include_router(cover_letters_router)
