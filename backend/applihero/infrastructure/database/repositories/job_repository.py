"""Concrete job repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from applihero.application.interfaces import JobRepository
from applihero.domain.entities import Job
from applihero.infrastructure.database.models import JobModel


class SQLAlchemyJobRepository(JobRepository):
    """Implements the JobRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: JobModel) -> Job:
        """Map ORM model → domain entity."""
        return Job(
            id=model.id,
            user_id=model.user_id,
            job_title=model.job_title,
            company_name=model.company_name,
            job_description=model.job_description,
            status=model.status,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, job_id: str) -> Job | None:
        result = await self._session.get(JobModel, job_id)
        return self._to_entity(result) if result else None

    async def list_for_user(self, user_id: str, skip: int = 0, limit: int = 100) -> list[Job]:
        stmt = (
            select(JobModel)
            .where(JobModel.user_id == user_id)
            .order_by(JobModel.updated_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, job: Job) -> Job:
        model = JobModel(
            user_id=job.user_id,
            job_title=job.job_title,
            company_name=job.company_name,
            job_description=job.job_description,
            status=job.status,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, job: Job) -> Job:
        model = await self._session.get(JobModel, job.id)
        if model is None:
            raise ValueError(f"Job {job.id} not found in database")
        model.job_title = job.job_title
        model.company_name = job.company_name
        model.job_description = job.job_description
        model.status = job.status
        model.updated_at = job.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, job_id: str) -> bool:
        model = await self._session.get(JobModel, job_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
