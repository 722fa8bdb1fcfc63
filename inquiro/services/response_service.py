"""Survey response submission and read service."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from inquiro.models.base import SurveyStatus
from inquiro.models.question import Question
from inquiro.models.survey import Survey
from inquiro.models.survey_response import ResponseAnswer, SurveyResponse
from inquiro.models.user import User
from inquiro.schemas.response import ResponsePayload
from inquiro.services.access import assert_ownership
from inquiro.services.errors import (
    AnonymousNotAllowedError,
    ForbiddenError,
    InquiroError,
    InvalidAnswerError,
    QuestionNotFoundError,
    RequiredQuestionMissingError,
    ResponseLimitReachedError,
    ResponseNotFoundError,
    SurveyEndedError,
    SurveyNotFoundError,
    SurveyNotStartedError,
)
from inquiro.services.survey_service import survey_with_questions
from inquiro.utils.datetime_helpers import ensure_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientInfo:
    """Network details recorded alongside a submission."""

    ip_address: str = "unknown"
    user_agent: str = "unknown"


def _response_with_answers():
    return select(SurveyResponse).options(
        selectinload(SurveyResponse.answers).selectinload(ResponseAnswer.question),
        selectinload(SurveyResponse.answers).selectinload(ResponseAnswer.selected_option),
    )


class ResponseService:
    """Accepts submissions and serves them back to survey owners."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_stored_response(self, response_id: int) -> Optional[SurveyResponse]:
        """Load a response with answers, questions and selected options; no access check."""
        result = await self.db.execute(
            _response_with_answers()
            .where(SurveyResponse.id == response_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _reserve_response_slot(self, survey_id: int) -> bool:
        """Bump ``response_count`` unless the cap is already reached.

        The check and the increment are one statement, so two concurrent
        submissions can never both take the last slot.
        """
        result = await self.db.execute(
            update(Survey)
            .where(Survey.id == survey_id)
            .where(
                or_(
                    Survey.max_responses.is_(None),
                    Survey.response_count < Survey.max_responses,
                )
            )
            .values(response_count=Survey.response_count + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def submit_response(
        self,
        survey_id: int,
        payload: ResponsePayload,
        identity: User | None,
        client_info: ClientInfo,
        *,
        token_id: Optional[int] = None,
        commit: bool = True,
        now: Optional[datetime] = None,
    ) -> SurveyResponse:
        """Validate admission rules in order and store the response.

        Checks run in this order and the first failure wins: survey is
        published, anonymous callers are allowed, the survey has started, it
        has not ended, the response cap has room, every required question is
        answered, every answer targets a question and option of this survey.
        Any failure rolls back the transaction, including the cap
        reservation.

        With ``commit=False`` the caller owns the transaction and must commit
        or roll back.
        """
        current = now or datetime.now(UTC)
        try:
            result = await self.db.execute(
                survey_with_questions()
                .where(Survey.id == survey_id)
                .where(Survey.status == SurveyStatus.PUBLISHED)
                .execution_options(populate_existing=True)
            )
            survey = result.scalar_one_or_none()
            if survey is None:
                raise SurveyNotFoundError("Survey not found or not published")

            if identity is None and not survey.allow_anonymous:
                raise AnonymousNotAllowedError()

            start_date = ensure_utc(survey.start_date)
            end_date = ensure_utc(survey.end_date)
            if start_date is not None and start_date > current:
                raise SurveyNotStartedError()
            if end_date is not None and end_date < current:
                raise SurveyEndedError()

            if not await self._reserve_response_slot(survey_id):
                raise ResponseLimitReachedError()

            answered = {answer.question_id for answer in payload.answers}
            for question in survey.questions:
                if question.is_required and question.id not in answered:
                    raise RequiredQuestionMissingError(question.text)

            option_ids_by_question = {
                question.id: {option.id for option in question.options}
                for question in survey.questions
            }
            for answer in payload.answers:
                option_ids = option_ids_by_question.get(answer.question_id)
                if option_ids is None:
                    raise InvalidAnswerError(
                        f"Question {answer.question_id} is not part of this survey"
                    )
                if answer.selected_option_id is not None and answer.selected_option_id not in option_ids:
                    raise InvalidAnswerError(
                        f"Option {answer.selected_option_id} is not an option of question {answer.question_id}"
                    )

            response = SurveyResponse(
                survey_id=survey_id,
                respondent_id=identity.user_id if identity else None,
                is_anonymous=payload.is_anonymous or identity is None,
                ip_address=client_info.ip_address,
                user_agent=client_info.user_agent,
                completed_at=current,
                token_id=token_id,
                answers=[
                    ResponseAnswer(
                        question_id=answer.question_id,
                        text_value=answer.text_value,
                        number_value=answer.number_value,
                        date_value=ensure_utc(answer.date_value),
                        boolean_value=answer.boolean_value,
                        selected_option_id=answer.selected_option_id,
                    )
                    for answer in payload.answers
                ],
            )
            self.db.add(response)
            await self.db.flush()
        except InquiroError as exc:
            await self.db.rollback()
            logger.info(f"Submission to survey {survey_id} rejected: {exc.message}")
            raise
        except Exception:
            await self.db.rollback()
            logger.error(f"Unexpected error storing response for survey {survey_id}", exc_info=True)
            raise

        if commit:
            await self.db.commit()
            logger.info(f"Response {response.id} stored for survey {survey_id}")
            return await self.get_stored_response(response.id)
        return response

    async def get_response_by_id(self, response_id: int, identity: User | None) -> SurveyResponse:
        response = await self.get_stored_response(response_id)
        if response is None:
            raise ResponseNotFoundError()
        try:
            await assert_ownership(self.db, response.survey_id, identity)
        except ForbiddenError as exc:
            raise ForbiddenError() from exc
        return response

    async def list_responses_by_survey(self, survey_id: int, identity: User | None) -> list[SurveyResponse]:
        await assert_ownership(self.db, survey_id, identity)
        result = await self.db.execute(
            _response_with_answers()
            .where(SurveyResponse.survey_id == survey_id)
            .order_by(SurveyResponse.created_at.desc(), SurveyResponse.id.desc())
        )
        return list(result.scalars().all())

    async def count_responses(self, survey_id: int, identity: User | None) -> int:
        await assert_ownership(self.db, survey_id, identity)
        result = await self.db.execute(
            select(func.count(SurveyResponse.id)).where(SurveyResponse.survey_id == survey_id)
        )
        return int(result.scalar_one())

    async def list_answers_by_question(self, question_id: int, identity: User | None) -> list[ResponseAnswer]:
        question = await self.db.get(Question, question_id)
        if question is None:
            raise QuestionNotFoundError()
        await assert_ownership(self.db, question.survey_id, identity)
        result = await self.db.execute(
            select(ResponseAnswer)
            .options(
                selectinload(ResponseAnswer.question),
                selectinload(ResponseAnswer.selected_option),
            )
            .where(ResponseAnswer.question_id == question_id)
            .order_by(ResponseAnswer.created_at.desc(), ResponseAnswer.id.desc())
        )
        return list(result.scalars().all())

    async def has_responded(self, survey_id: int, identity: User | None) -> bool:
        """Whether ``identity`` already submitted to the survey; False for anonymous callers."""
        if identity is None:
            return False
        result = await self.db.execute(
            select(SurveyResponse.id)
            .where(SurveyResponse.survey_id == survey_id)
            .where(SurveyResponse.respondent_id == identity.user_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
