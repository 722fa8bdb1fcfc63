"""Tests for QuestionService."""
import pytest

from inquiro.models.base import QuestionType, UserRole
from inquiro.schemas.question import OptionCreate, QuestionCreate
from inquiro.services import QuestionService
from inquiro.services.errors import ForbiddenError, QuestionNotFoundError, SurveyNotFoundError


def _choice_question(*option_texts: str, text: str = "Favourite fruit?") -> QuestionCreate:
    return QuestionCreate(
        text=text,
        type=QuestionType.CHECKBOX,
        is_required=True,
        order=1,
        options=[OptionCreate(text=option, order=index) for index, option in enumerate(option_texts, start=1)],
    )


@pytest.mark.asyncio
async def test_add_question_returns_options_in_order(db_session, creator, survey_factory):
    survey = await survey_factory(creator)
    data = QuestionCreate(
        text="Rank these",
        type=QuestionType.RADIO,
        options=[
            OptionCreate(text="third", order=3),
            OptionCreate(text="first", order=1),
            OptionCreate(text="second", order=2),
        ],
    )

    question = await QuestionService(db_session).add_question(survey.id, data, creator)

    assert question.survey_id == survey.id
    assert question.type == QuestionType.RADIO
    assert [option.text for option in question.options] == ["first", "second", "third"]
    assert [option.order for option in question.options] == [1, 2, 3]


@pytest.mark.asyncio
async def test_add_question_to_missing_survey(db_session, creator):
    with pytest.raises(SurveyNotFoundError):
        await QuestionService(db_session).add_question(999_999, _choice_question("a"), creator)


@pytest.mark.asyncio
async def test_non_owner_cannot_add_question(db_session, creator, other_creator, survey_factory):
    survey = await survey_factory(creator)

    with pytest.raises(ForbiddenError, match="Not survey owner"):
        await QuestionService(db_session).add_question(survey.id, _choice_question("a"), other_creator)


@pytest.mark.asyncio
async def test_update_replaces_every_option(db_session, creator, survey_factory):
    survey = await survey_factory(creator)
    service = QuestionService(db_session)
    question = await service.add_question(survey.id, _choice_question("apple", "pear", "plum"), creator)
    old_option_ids = {option.id for option in question.options}

    updated = await service.update_question(
        question.id,
        QuestionCreate(
            text="Favourite citrus?",
            type=QuestionType.RADIO,
            is_required=False,
            order=4,
            options=[OptionCreate(text="lime", order=1), OptionCreate(text="lemon", order=2)],
        ),
        creator,
    )

    assert updated.text == "Favourite citrus?"
    assert updated.type == QuestionType.RADIO
    assert updated.is_required is False
    assert updated.order == 4
    assert [option.text for option in updated.options] == ["lime", "lemon"]
    assert not old_option_ids & {option.id for option in updated.options}


@pytest.mark.asyncio
async def test_update_with_no_options_clears_them(db_session, creator, survey_factory):
    survey = await survey_factory(creator)
    service = QuestionService(db_session)
    question = await service.add_question(survey.id, _choice_question("x", "y"), creator)

    updated = await service.update_question(
        question.id, QuestionCreate(text="Now free text", type=QuestionType.TEXT), creator
    )

    assert updated.options == []


@pytest.mark.asyncio
async def test_update_missing_question(db_session, creator):
    with pytest.raises(QuestionNotFoundError, match="Question not found"):
        await QuestionService(db_session).update_question(999_999, _choice_question("a"), creator)


@pytest.mark.asyncio
async def test_delete_question(db_session, creator, survey_factory):
    survey = await survey_factory(creator)
    service = QuestionService(db_session)
    question = await service.add_question(survey.id, _choice_question("a", "b"), creator)
    question_id = question.id

    await service.delete_question(question_id, creator)

    with pytest.raises(QuestionNotFoundError):
        await service.get_question_by_id(question_id, creator)
    assert await service.list_questions_by_survey(survey.id, creator) == []


@pytest.mark.asyncio
async def test_add_option_appends_after_highest_order(db_session, creator, survey_factory):
    survey = await survey_factory(creator)
    service = QuestionService(db_session)
    question = await service.add_question(
        survey.id,
        QuestionCreate(
            text="Pick",
            type=QuestionType.MULTIPLE_CHOICE,
            options=[OptionCreate(text="a", order=1), OptionCreate(text="b", order=5)],
        ),
        creator,
    )

    option = await service.add_option_to_question(question.id, "c", creator)

    assert option.order == 6
    assert option.question_id == question.id


@pytest.mark.asyncio
async def test_first_added_option_gets_order_one(db_session, creator, survey_factory):
    survey = await survey_factory(creator)
    service = QuestionService(db_session)
    question = await service.add_question(
        survey.id, QuestionCreate(text="Pick", type=QuestionType.RADIO), creator
    )

    option = await service.add_option_to_question(question.id, "only", creator)

    assert option.order == 1


@pytest.mark.asyncio
async def test_list_questions_follows_survey_visibility(db_session, creator, user_factory, survey_factory):
    draft = await survey_factory(creator, questions=[_choice_question("a")])
    published = await survey_factory(creator, publish=True)
    respondent = await user_factory(role=UserRole.RESPONDENT)
    service = QuestionService(db_session)

    assert len(await service.list_questions_by_survey(draft.id, creator)) == 1
    assert len(await service.list_questions_by_survey(published.id, respondent)) == 2
    with pytest.raises(ForbiddenError):
        await service.list_questions_by_survey(draft.id, respondent)


@pytest.mark.asyncio
async def test_get_question_by_id_hides_draft_questions(db_session, creator, respondent, survey_factory):
    survey = await survey_factory(creator, questions=[_choice_question("a", "b")])
    question_id = survey.questions[0].id
    service = QuestionService(db_session)

    question = await service.get_question_by_id(question_id, creator)
    assert [option.text for option in question.options] == ["a", "b"]

    with pytest.raises(ForbiddenError):
        await service.get_question_by_id(question_id, respondent)


@pytest.mark.asyncio
async def test_option_ids_are_never_reissued(db_session, creator, survey_factory):
    """Ids of deleted options stay retired even when they were the highest in the table."""
    survey = await survey_factory(creator)
    service = QuestionService(db_session)
    question = await service.add_question(survey.id, _choice_question("north", "south"), creator)
    retired_ids = {option.id for option in question.options}

    await service.delete_question(question.id, creator)
    replacement = await service.add_question(survey.id, _choice_question("east", "west"), creator)

    assert min(option.id for option in replacement.options) > max(retired_ids)
