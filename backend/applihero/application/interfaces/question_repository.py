"""Abstract repository interface (port) for application questions."""

from abc import ABC, abstractmethod

from applihero.domain.entities import Question


class QuestionRepository(ABC):
    """Port for question persistence."""

    @abstractmethod
    async def get_by_id(self, question_id: str) -> Question | None:
        ...

    @abstractmethod
    async def list_for_job(self, job_id: str) -> list[Question]:
        ...

    @abstractmethod
    async def create(self, question: Question) -> Question:
        ...

    @abstractmethod
    async def update(self, question: Question) -> Question:
        ...
