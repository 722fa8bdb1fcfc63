"""Survey data-access service."""
from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from inquiro.models.base import SurveyStatus
from inquiro.models.question import Question
from inquiro.models.survey import Survey
from inquiro.models.user import User
from inquiro.schemas.survey import SurveyCreate, SurveyUpdate
from inquiro.services.access import assert_ownership, require_creator, require_user
from inquiro.services.errors import (
    ForbiddenError,
    InvalidSurveyUpdateError,
    PublishWithoutQuestionsError,
    SurveyNotFoundError,
)
from inquiro.utils.datetime_helpers import ensure_utc, is_within_window

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "title",
    "description",
    "is_public",
    "allow_anonymous",
    "max_responses",
    "start_date",
    "end_date",
    "status",
)
NON_NULLABLE_FIELDS = frozenset({"title", "is_public", "allow_anonymous", "status"})


def survey_with_questions():
    """Select a survey with its questions and their options eagerly loaded."""
    return select(Survey).options(
        selectinload(Survey.questions).selectinload(Question.options)
    )


def _validate_window(start_date: Optional[datetime], end_date: Optional[datetime]) -> None:
    if start_date and end_date and ensure_utc(start_date) > ensure_utc(end_date):
        raise InvalidSurveyUpdateError("start_date must not be after end_date")


class SurveyService:
    """Survey CRUD with ownership and visibility rules."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load_detail(self, survey_id: int) -> Optional[Survey]:
        result = await self.db.execute(
            survey_with_questions()
            .where(Survey.id == survey_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_public_surveys(self, now: Optional[datetime] = None) -> list[Survey]:
        """Published, public surveys whose availability window contains ``now``."""
        current = now or datetime.now(UTC)
        result = await self.db.execute(
            select(Survey)
            .where(Survey.status == SurveyStatus.PUBLISHED)
            .where(Survey.is_public.is_(True))
            .where(or_(Survey.start_date.is_(None), Survey.start_date <= current))
            .where(or_(Survey.end_date.is_(None), Survey.end_date >= current))
            .order_by(Survey.created_at.desc(), Survey.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_surveys_by_owner(self, identity: User | None) -> list[Survey]:
        user = require_creator(identity)
        result = await self.db.execute(
            select(Survey)
            .where(Survey.creator_id == user.user_id)
            .order_by(Survey.created_at.desc(), Survey.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count_surveys_by_owner(self, identity: User | None) -> int:
        user = require_creator(identity)
        result = await self.db.execute(
            select(func.count(Survey.id)).where(Survey.creator_id == user.user_id)
        )
        return int(result.scalar_one())

    async def get_survey_by_id(self, survey_id: int, identity: User | None) -> Survey:
        """Return a survey with ordered questions.

        Owners see every status; everyone else only sees published surveys.
        """
        user = require_user(identity)
        survey = await self._load_detail(survey_id)
        if survey is None:
            raise SurveyNotFoundError()
        if survey.creator_id != user.user_id and survey.status != SurveyStatus.PUBLISHED:
            raise ForbiddenError()
        return survey

    async def get_active_survey_by_id(self, survey_id: int, now: Optional[datetime] = None) -> Survey:
        survey = await self._load_detail(survey_id)
        if (
            survey is None
            or survey.status != SurveyStatus.PUBLISHED
            or not is_within_window(survey.start_date, survey.end_date, now)
        ):
            raise SurveyNotFoundError("Survey not found or not active")
        return survey

    async def create_survey(self, data: SurveyCreate, identity: User | None) -> Survey:
        user = require_creator(identity)
        _validate_window(data.start_date, data.end_date)

        survey = Survey(
            title=data.title,
            description=data.description,
            status=SurveyStatus.DRAFT,
            is_public=data.is_public,
            allow_anonymous=data.allow_anonymous,
            max_responses=data.max_responses,
            start_date=ensure_utc(data.start_date),
            end_date=ensure_utc(data.end_date),
            response_count=0,
            creator_id=user.user_id,
        )
        self.db.add(survey)
        await self.db.commit()
        logger.info(f"Survey {survey.id} created by {user.user_id}")
        return await self._load_detail(survey.id)

    async def update_survey(self, survey_id: int, patch: SurveyUpdate, identity: User | None) -> Survey:
        """Apply the fields present in ``patch``.

        Status may only move between DRAFT and CLOSED here; publishing goes
        through :meth:`publish_survey` so the question check cannot be skipped.
        """
        survey = await assert_ownership(self.db, survey_id, identity)
        changes = patch.model_dump(exclude_unset=True)

        if changes.get("status") == SurveyStatus.PUBLISHED:
            raise InvalidSurveyUpdateError("Use the publish operation to publish a survey")
        if "title" in changes and not changes["title"]:
            raise InvalidSurveyUpdateError("Title cannot be empty")
        start_date = changes.get("start_date", survey.start_date)
        end_date = changes.get("end_date", survey.end_date)
        _validate_window(start_date, end_date)

        for field in UPDATABLE_FIELDS:
            if field not in changes:
                continue
            value = changes[field]
            if value is None and field in NON_NULLABLE_FIELDS:
                continue
            if field in ("start_date", "end_date"):
                value = ensure_utc(value)
            setattr(survey, field, value)

        await self.db.commit()
        logger.info(f"Survey {survey_id} updated: {sorted(changes)}")
        return await self._load_detail(survey_id)

    async def publish_survey(self, survey_id: int, identity: User | None) -> Survey:
        survey = await assert_ownership(self.db, survey_id, identity)
        question_count = await self.db.scalar(
            select(func.count(Question.id)).where(Question.survey_id == survey_id)
        )
        if not question_count:
            raise PublishWithoutQuestionsError()

        survey.status = SurveyStatus.PUBLISHED
        await self.db.commit()
        logger.info(f"Survey {survey_id} published with {question_count} questions")
        return await self._load_detail(survey_id)

    async def delete_survey(self, survey_id: int, identity: User | None) -> None:
        survey = await assert_ownership(self.db, survey_id, identity)
        await self.db.delete(survey)
        await self.db.commit()
        logger.info(f"Survey {survey_id} deleted")
