"""Concrete repositories for questions and coach chat history."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from applihero.application.interfaces import CoachMessageRepository, QuestionRepository
from applihero.domain.entities import CoachMessage, Question
from applihero.infrastructure.database.models import CoachMessageModel, QuestionModel


class SQLAlchemyQuestionRepository(QuestionRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: QuestionModel) -> Question:
        return Question(
            id=model.id,
            job_id=model.job_id,
            question_text=model.question_text,
            answer_text=model.answer_text,
            feedback_score=model.feedback_score,
            feedback_notes=model.feedback_notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def get_by_id(self, question_id: str) -> Question | None:
        result = await self._session.get(QuestionModel, question_id)
        return self._to_entity(result) if result else None

    async def list_for_job(self, job_id: str) -> list[Question]:
        stmt = (
            select(QuestionModel)
            .where(QuestionModel.job_id == job_id)
            .order_by(QuestionModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, question: Question) -> Question:
        model = QuestionModel(
            job_id=question.job_id,
            question_text=question.question_text,
            answer_text=question.answer_text,
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, question: Question) -> Question:
        model = await self._session.get(QuestionModel, question.id)
        if model is None:
            raise ValueError(f"Question {question.id} not found in database")
        model.answer_text = question.answer_text
        model.feedback_score = question.feedback_score
        model.feedback_notes = question.feedback_notes
        model.updated_at = question.updated_at
        await self._session.flush()
        return self._to_entity(model)


class SQLAlchemyCoachMessageRepository(CoachMessageRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_job(self, job_id: str, limit: int = 20) -> list[CoachMessage]:
        # Newest N first, then flipped back to chronological order.
        stmt = (
            select(CoachMessageModel)
            .where(CoachMessageModel.job_id == job_id)
            .order_by(CoachMessageModel.created_at.desc(), CoachMessageModel.id.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        rows = list(result.scalars().all())
        rows.reverse()
        return [
            CoachMessage(
                id=row.id,
                job_id=row.job_id,
                role=row.role,
                content=row.content,
                created_at=row.created_at,
            )
            for row in rows
        ]

    async def add_many(self, messages: list[CoachMessage]) -> None:
        """Insert the turns inside a SAVEPOINT.

        A failed insert only rolls back the savepoint, so the request's
        session can still commit its other writes.
        """
        async with self._session.begin_nested():
            self._session.add_all(
                [
                    CoachMessageModel(
                        job_id=m.job_id,
                        role=m.role,
                        content=m.content,
                        created_at=m.created_at,
                    )
                    for m in messages
                ]
            )
            await self._session.flush()
