"""AI-assisted survey drafting."""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.config import get_settings
from inquiro.models.base import SurveyStatus
from inquiro.models.question import Question, QuestionOption
from inquiro.models.survey import Survey
from inquiro.models.user import User
from inquiro.schemas.ai import GeneratedSurvey
from inquiro.services.access import require_creator
from inquiro.services.errors import InquiroError
from inquiro.services.survey_service import SurveyService

from . import openai_api
from .prompt_builder import SYSTEM_PROMPT, build_survey_prompt

logger = logging.getLogger(__name__)


class SurveyGenerationError(InquiroError):
    default_message = "Failed to generate survey. Please try again later."


class AIServiceUnavailableError(InquiroError):
    default_message = "AI service is not configured. Please contact the administrator."


class SurveyGenerator:
    """Drafts surveys with an LLM and optionally stores them as DRAFT surveys."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()

    async def generate(
        self,
        topic: str,
        number_of_questions: int = 5,
        target_audience: str = "general public",
        additional_context: Optional[str] = None,
    ) -> GeneratedSurvey:
        """Ask the model for a survey draft and validate its shape.

        ``number_of_questions`` is capped at ``settings.ai_max_questions``.
        """
        if not self.settings.openai_api_key:
            logger.error("OPENAI_API_KEY is not configured")
            raise AIServiceUnavailableError()

        count = max(1, min(number_of_questions, self.settings.ai_max_questions))
        prompt = build_survey_prompt(topic, count, target_audience, additional_context)
        logger.info(f"Generating survey draft on {topic!r} with {count} questions")

        try:
            raw = await openai_api.generate_json(SYSTEM_PROMPT, prompt)
        except openai_api.OpenAIAPIError as exc:
            logger.error(f"AI survey generation failed: {exc}")
            raise SurveyGenerationError() from exc

        try:
            draft = GeneratedSurvey.model_validate_json(raw)
        except ValidationError as exc:
            logger.error(f"AI survey draft did not match the expected shape: {exc}")
            raise SurveyGenerationError() from exc

        if not draft.questions:
            raise SurveyGenerationError()
        return draft

    async def persist(self, draft: GeneratedSurvey, identity: User | None) -> Survey:
        """Store a draft as a DRAFT survey owned by ``identity``.

        Questions are ordered 1..N and each question's options 1..M.
        """
        user = require_creator(identity)
        survey = Survey(
            title=draft.title,
            description=draft.description or None,
            status=SurveyStatus.DRAFT,
            creator_id=user.user_id,
            response_count=0,
            questions=[
                Question(
                    text=question.text,
                    description=question.description,
                    type=question.type,
                    is_required=question.is_required,
                    order=position,
                    options=[
                        QuestionOption(text=option.text, order=option_position)
                        for option_position, option in enumerate(question.options or [], start=1)
                    ] if question.type.is_choice else [],
                )
                for position, question in enumerate(draft.questions, start=1)
            ],
        )
        self.db.add(survey)
        await self.db.commit()
        logger.info(f"Stored generated survey {survey.id} with {len(draft.questions)} questions")
        return await SurveyService(self.db).get_survey_by_id(survey.id, user)
