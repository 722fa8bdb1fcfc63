"""Tests for AI survey drafting with the OpenAI call stubbed out."""
import json

import pytest

from inquiro.config import get_settings
from inquiro.models.base import QuestionType, SurveyStatus
from inquiro.schemas.ai import GeneratedSurvey
from inquiro.services.ai import AIServiceUnavailableError, SurveyGenerationError, SurveyGenerator
from inquiro.services.ai import openai_api
from inquiro.services.ai.prompt_builder import build_survey_prompt
from inquiro.services.errors import ForbiddenError

DRAFT = {
    "title": "Remote Work Check-in",
    "description": "How is working from home going?",
    "questions": [
        {"text": "How many days do you work remotely?", "type": "NUMBER", "is_required": True},
        {
            "text": "Preferred meeting tool",
            "type": "RADIO",
            "is_required": False,
            "options": [{"text": "Zoom"}, {"text": "Meet"}, {"text": "Teams"}],
        },
        {
            "text": "Anything else?",
            "type": "TEXT",
            "options": [{"text": "ignored for free text"}],
        },
    ],
}


@pytest.fixture
def ai_enabled(monkeypatch):
    monkeypatch.setattr(get_settings(), "openai_api_key", "sk-test")


@pytest.fixture
def fake_completion(monkeypatch):
    """Replace the OpenAI call; records every prompt it receives."""
    calls = []

    def _install(reply):
        async def _generate_json(system_prompt, user_prompt, model=None, timeout=None):
            calls.append(user_prompt)
            if isinstance(reply, Exception):
                raise reply
            return reply

        monkeypatch.setattr(openai_api, "generate_json", _generate_json)
        return calls

    return _install


def test_prompt_mentions_topic_audience_and_context():
    prompt = build_survey_prompt("coffee", 4, "baristas", "Focus on espresso")

    assert '"coffee"' in prompt
    assert "with 4 questions for baristas" in prompt
    assert "Additional Context: Focus on espresso" in prompt
    assert "MULTIPLE_CHOICE" in prompt and "NUMBER" in prompt


def test_prompt_without_context():
    assert "Additional Context" not in build_survey_prompt("tea", 3)


@pytest.mark.asyncio
async def test_generate_without_api_key(db_session):
    with pytest.raises(AIServiceUnavailableError, match="not configured"):
        await SurveyGenerator(db_session).generate("coffee")


@pytest.mark.asyncio
async def test_generate_returns_validated_draft(db_session, ai_enabled, fake_completion):
    calls = fake_completion(json.dumps(DRAFT))

    draft = await SurveyGenerator(db_session).generate("remote work", number_of_questions=3)

    assert isinstance(draft, GeneratedSurvey)
    assert draft.title == "Remote Work Check-in"
    assert [question.type for question in draft.questions] == [
        QuestionType.NUMBER,
        QuestionType.RADIO,
        QuestionType.TEXT,
    ]
    assert "with 3 questions" in calls[0]


@pytest.mark.asyncio
async def test_question_count_is_capped(db_session, ai_enabled, fake_completion):
    calls = fake_completion(json.dumps(DRAFT))

    await SurveyGenerator(db_session).generate("remote work", number_of_questions=500)

    assert f"with {get_settings().ai_max_questions} questions" in calls[0]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply",
    [
        "not json at all",
        json.dumps({"title": "Missing questions"}),
        json.dumps({"title": "Bad type", "questions": [{"text": "?", "type": "SLIDER"}]}),
        json.dumps({"title": "Empty", "questions": []}),
    ],
)
async def test_malformed_reply_is_a_generation_error(db_session, ai_enabled, fake_completion, reply):
    fake_completion(reply)

    with pytest.raises(SurveyGenerationError, match="Failed to generate survey"):
        await SurveyGenerator(db_session).generate("remote work")


@pytest.mark.asyncio
async def test_api_failure_is_a_generation_error(db_session, ai_enabled, fake_completion):
    fake_completion(openai_api.OpenAIAPIError("OpenAI API error: rate limited"))

    with pytest.raises(SurveyGenerationError):
        await SurveyGenerator(db_session).generate("remote work")


@pytest.mark.asyncio
async def test_persist_stores_draft_survey(db_session, creator):
    draft = GeneratedSurvey.model_validate(DRAFT)

    survey = await SurveyGenerator(db_session).persist(draft, creator)

    assert survey.status == SurveyStatus.DRAFT
    assert survey.creator_id == creator.user_id
    assert survey.title == "Remote Work Check-in"
    assert [question.order for question in survey.questions] == [1, 2, 3]
    assert [question.is_required for question in survey.questions] == [True, False, False]
    radio = survey.questions[1]
    assert [(option.text, option.order) for option in radio.options] == [("Zoom", 1), ("Meet", 2), ("Teams", 3)]
    assert survey.questions[2].options == []


@pytest.mark.asyncio
async def test_persist_requires_creator(db_session, respondent):
    with pytest.raises(ForbiddenError):
        await SurveyGenerator(db_session).persist(GeneratedSurvey.model_validate(DRAFT), respondent)
