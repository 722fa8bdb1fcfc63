"""Question and option data-access service."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from inquiro.models.question import Question, QuestionOption
from inquiro.models.user import User
from inquiro.schemas.question import OptionCreate, QuestionCreate
from inquiro.services.access import assert_ownership
from inquiro.services.errors import QuestionNotFoundError
from inquiro.services.survey_service import SurveyService

logger = logging.getLogger(__name__)


def _build_options(options: Optional[list[OptionCreate]]) -> list[QuestionOption]:
    return [
        QuestionOption(text=option.text, value=option.value, order=option.order)
        for option in options or []
    ]


class QuestionService:
    """Questions belong to a survey; every write goes through the survey's owner."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.survey_service = SurveyService(db)

    async def _load_question(self, question_id: int) -> Optional[Question]:
        result = await self.db.execute(
            select(Question)
            .options(selectinload(Question.options))
            .where(Question.id == question_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _get_owned_question(self, question_id: int, identity: User | None) -> Question:
        question = await self.db.get(Question, question_id)
        if question is None:
            raise QuestionNotFoundError()
        await assert_ownership(self.db, question.survey_id, identity)
        return question

    async def add_question(self, survey_id: int, data: QuestionCreate, identity: User | None) -> Question:
        """Insert a question and its options in one transaction."""
        await assert_ownership(self.db, survey_id, identity)

        question = Question(
            survey_id=survey_id,
            text=data.text,
            description=data.description,
            type=data.type,
            is_required=data.is_required,
            order=data.order,
            options=_build_options(data.options),
        )
        self.db.add(question)
        await self.db.commit()
        logger.info(f"Question {question.id} added to survey {survey_id}")
        return await self._load_question(question.id)

    async def update_question(self, question_id: int, data: QuestionCreate, identity: User | None) -> Question:
        """Update scalar fields and replace the whole option set.

        Existing options are deleted and the request's options inserted in
        their place, so option ids change on every update.
        """
        question = await self._get_owned_question(question_id, identity)

        if data.text is not None:
            question.text = data.text
        if data.type is not None:
            question.type = data.type
        question.description = data.description
        question.is_required = data.is_required
        question.order = data.order

        await self.db.execute(delete(QuestionOption).where(QuestionOption.question_id == question_id))
        for option in _build_options(data.options):
            option.question_id = question_id
            self.db.add(option)

        await self.db.commit()
        logger.info(f"Question {question_id} updated with {len(data.options or [])} options")
        return await self._load_question(question_id)

    async def delete_question(self, question_id: int, identity: User | None) -> None:
        question = await self._get_owned_question(question_id, identity)
        await self.db.delete(question)
        await self.db.commit()
        logger.info(f"Question {question_id} deleted")

    async def list_questions_by_survey(self, survey_id: int, identity: User | None) -> list[Question]:
        survey = await self.survey_service.get_survey_by_id(survey_id, identity)
        return list(survey.questions)

    async def get_question_by_id(self, question_id: int, identity: User | None) -> Question:
        question = await self._load_question(question_id)
        if question is None:
            raise QuestionNotFoundError()
        # Raises when the caller may not see the parent survey.
        await self.survey_service.get_survey_by_id(question.survey_id, identity)
        return question

    async def add_option_to_question(self, question_id: int, text: str, identity: User | None) -> QuestionOption:
        """Append an option after the current highest ``order`` (1 when there are none)."""
        await self._get_owned_question(question_id, identity)

        max_order = await self.db.scalar(
            select(func.max(QuestionOption.order)).where(QuestionOption.question_id == question_id)
        )
        option = QuestionOption(
            question_id=question_id,
            text=text,
            order=(max_order or 0) + 1,
        )
        self.db.add(option)
        await self.db.commit()
        await self.db.refresh(option)
        return option
