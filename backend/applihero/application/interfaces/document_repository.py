"""Abstract repository interface (port) for source documents."""

from abc import ABC, abstractmethod

from applihero.domain.entities import DocumentType, JobDocument


class DocumentRepository(ABC):
    """Port for document persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, document_id: str) -> JobDocument | None:
        ...

    @abstractmethod
    async def list_for_user(
        self, user_id: str, *, job_id: str | None = None, global_only: bool = False
    ) -> list[JobDocument]:
        """Documents of a user.

        With ``job_id`` only that job's documents are returned; with
        ``global_only`` only documents without a job.
        """
        ...

    @abstractmethod
    async def find_for_job(
        self, job_id: str, document_type: DocumentType
    ) -> JobDocument | None:
        """The first document of the given type attached to a job, if any."""
        ...

    @abstractmethod
    async def create(self, document: JobDocument) -> JobDocument:
        ...

    @abstractmethod
    async def update(self, document: JobDocument) -> JobDocument:
        ...

    @abstractmethod
    async def delete(self, document_id: str) -> bool:
        ...
