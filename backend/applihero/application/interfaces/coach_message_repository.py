"""Abstract repository interface (port) for coach chat history."""

from abc import ABC, abstractmethod

from applihero.domain.entities import CoachMessage


class CoachMessageRepository(ABC):
    """Port for persisted coach chat messages."""

    @abstractmethod
    async def list_for_job(self, job_id: str, limit: int = 20) -> list[CoachMessage]:
        """The most recent ``limit`` messages of a job, in chronological order."""
        ...

    @abstractmethod
    async def add_many(self, messages: list[CoachMessage]) -> None:
        ...
