"""Abstract repository interface (port) for résumé versions."""

from abc import ABC, abstractmethod

from applihero.domain.entities import ResumeVersion


class ResumeVersionRepository(ABC):
    """Port for the résumé versions a user reviewed against a job."""

    @abstractmethod
    async def list_for_job(self, job_id: str, user_id: str) -> list[ResumeVersion]:
        """All versions of the user for the job, oldest first."""
        ...

    @abstractmethod
    async def create(self, version: ResumeVersion) -> ResumeVersion:
        ...
