"""Abstract repository interface (port) for jobs."""

from abc import ABC, abstractmethod

from applihero.domain.entities import Job


class JobRepository(ABC):
    """Port for job persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, job_id: str) -> Job | None:
        ...

    @abstractmethod
    async def list_for_user(self, user_id: str, skip: int = 0, limit: int = 100) -> list[Job]:
        """Jobs of one user, most recently updated first."""
        ...

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Persist a new job and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, job: Job) -> Job:
        ...

    @abstractmethod
    async def delete(self, job_id: str) -> bool:
        """Delete a job and everything scoped to it. Returns False if not found."""
        ...
