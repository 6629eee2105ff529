"""Concrete document repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from applihero.application.interfaces import DocumentRepository
from applihero.domain.entities import DocumentType, JobDocument
from applihero.infrastructure.database.models import JobDocumentModel


class SQLAlchemyDocumentRepository(DocumentRepository):
    """Implements the DocumentRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: JobDocumentModel) -> JobDocument:
        return JobDocument(
            id=model.id,
            user_id=model.user_id,
            job_id=model.job_id,
            document_type=DocumentType(model.document_type),
            title=model.title,
            content=model.content,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, document_id: str) -> JobDocument | None:
        result = await self._session.get(JobDocumentModel, document_id)
        return self._to_entity(result) if result else None

    async def list_for_user(
        self, user_id: str, *, job_id: str | None = None, global_only: bool = False
    ) -> list[JobDocument]:
        stmt = select(JobDocumentModel).where(JobDocumentModel.user_id == user_id)
        if job_id is not None:
            stmt = stmt.where(JobDocumentModel.job_id == job_id)
        elif global_only:
            stmt = stmt.where(JobDocumentModel.job_id.is_(None))
        stmt = stmt.order_by(JobDocumentModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def find_for_job(
        self, job_id: str, document_type: DocumentType
    ) -> JobDocument | None:
        stmt = (
            select(JobDocumentModel)
            .where(JobDocumentModel.job_id == job_id)
            .where(JobDocumentModel.document_type == document_type.value)
            .order_by(JobDocumentModel.created_at)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, document: JobDocument) -> JobDocument:
        model = JobDocumentModel(
            user_id=document.user_id,
            job_id=document.job_id,
            document_type=document.document_type.value,
            title=document.title,
            content=document.content,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, document: JobDocument) -> JobDocument:
        model = await self._session.get(JobDocumentModel, document.id)
        if model is None:
            raise ValueError(f"JobDocument {document.id} not found in database")
        model.title = document.title
        model.content = document.content
        model.updated_at = document.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, document_id: str) -> bool:
        model = await self._session.get(JobDocumentModel, document_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
