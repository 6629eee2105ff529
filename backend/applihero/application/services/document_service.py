"""Application service (use case) for source documents."""

from applihero.application.interfaces import DocumentRepository, JobRepository
from applihero.application.schemas.documents import DocumentCreate, DocumentUpdate
from applihero.application.services.document_ingestion_service import DocumentIngestionService
from applihero.application.services.job_service import require_owned_job
from applihero.domain.entities import JobDocument
from applihero.domain.exceptions import EntityNotFoundError


class DocumentService:
    """Document CRUD where every content change goes through ingestion."""

    def __init__(
        self,
        document_repository: DocumentRepository,
        job_repository: JobRepository,
        ingestion_service: DocumentIngestionService,
    ):
        self._repository = document_repository
        self._job_repo = job_repository
        self._ingestion = ingestion_service

    async def get_document(self, document_id: str, user_id: str) -> JobDocument:
        document = await self._repository.get_by_id(document_id)
        if document is None or document.user_id != user_id:
            raise EntityNotFoundError("JobDocument", document_id)
        return document

    async def list_documents(self, user_id: str, job_id: str | None = None) -> list[JobDocument]:
        return await self._repository.list_for_user(user_id, job_id=job_id)

    async def create_document(self, data: DocumentCreate) -> tuple[JobDocument, int]:
        """Store a pasted document and ingest it. Returns the document and its chunk count."""
        if data.job_id is not None:
            await require_owned_job(self._job_repo, data.job_id, data.user_id)

        document = await self._repository.create(
            JobDocument(
                user_id=data.user_id,
                job_id=data.job_id,
                title=data.title,
                content=data.content,
                document_type=data.document_type,
            )
        )
        chunks = await self._ingestion.ingest(document)
        return document, chunks

    async def update_document(
        self, document_id: str, data: DocumentUpdate
    ) -> tuple[JobDocument, int | None]:
        """Edit a document. Returns the chunk count, or None when content was unchanged."""
        document = await self.get_document(document_id, data.user_id)
        content_changed = data.content is not None and data.content != document.content

        document.update(title=data.title, content=data.content)
        document = await self._repository.update(document)

        if not content_changed:
            return document, None
        return document, await self._ingestion.ingest(document)

    async def delete_document(self, document_id: str, user_id: str) -> bool:
        await self.get_document(document_id, user_id)
        await self._ingestion.remove(document_id)
        return await self._repository.delete(document_id)
