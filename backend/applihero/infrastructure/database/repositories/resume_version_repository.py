"""Concrete résumé-version repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from applihero.application.interfaces import ResumeVersionRepository
from applihero.domain.entities import ResumeVersion
from applihero.infrastructure.database.models import ResumeVersionModel


class SQLAlchemyResumeVersionRepository(ResumeVersionRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ResumeVersionModel) -> ResumeVersion:
        return ResumeVersion(
            id=model.id,
            job_id=model.job_id,
            user_id=model.user_id,
            resume_text=model.resume_text,
            feedback_score=model.feedback_score,
            feedback=model.feedback,
            created_at=model.created_at,
        )

    async def list_for_job(self, job_id: str, user_id: str) -> list[ResumeVersion]:
        stmt = (
            select(ResumeVersionModel)
            .where(ResumeVersionModel.job_id == job_id, ResumeVersionModel.user_id == user_id)
            .order_by(ResumeVersionModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, version: ResumeVersion) -> ResumeVersion:
        model = ResumeVersionModel(
            job_id=version.job_id,
            user_id=version.user_id,
            resume_text=version.resume_text,
            feedback_score=version.feedback_score,
            feedback=version.feedback,
            created_at=version.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)
