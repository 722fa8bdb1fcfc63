"""Tests for survey and question API endpoints."""
import pytest

from httpx import AsyncClient, ASGITransport


API_BASE_URL = "http://test"


def _client(test_app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=test_app), base_url=API_BASE_URL)


@pytest.mark.asyncio
async def test_create_survey_requires_login(test_app):
    async with _client(test_app) as client:
        response = await client.post("/surveys", json={"title": "Anonymous draft"})

    assert response.status_code == 401
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_respondent_cannot_create_survey(test_app, respondent, auth_headers):
    async with _client(test_app) as client:
        response = await client.post("/surveys", json={"title": "Nope"}, headers=auth_headers(respondent))

    assert response.status_code == 403
    assert response.json()["error"] == "Forbidden: Creator role required"


@pytest.mark.asyncio
async def test_create_survey_requires_title(test_app, creator, auth_headers):
    async with _client(test_app) as client:
        response = await client.post("/surveys", json={"title": "   "}, headers=auth_headers(creator))

    assert response.status_code == 400
    assert response.json()["error"] == "Title is required"


@pytest.mark.asyncio
async def test_survey_authoring_flow(test_app, creator, respondent, auth_headers):
    """Create, add questions, publish and read back as a respondent."""
    owner = auth_headers(creator)

    async with _client(test_app) as client:
        created = await client.post(
            "/surveys",
            json={"title": "Lunch poll", "description": "Where shall we eat?", "is_public": True},
            headers=owner,
        )
        assert created.status_code == 201
        body = created.json()
        assert body["message"] == "Survey created successfully"
        survey = body["data"]
        assert survey["status"] == "DRAFT"
        assert survey["questions"] == []
        survey_id = survey["id"]

        early_publish = await client.post(f"/surveys/{survey_id}/publish", headers=owner)
        assert early_publish.status_code == 400
        assert early_publish.json()["error"] == "Cannot publish survey without questions"

        question = await client.post(
            f"/questions/survey/{survey_id}",
            json={
                "text": "Cuisine?",
                "type": "RADIO",
                "is_required": True,
                "order": 1,
                "options": [{"text": "Thai", "order": 1}, {"text": "Pizza", "order": 2}],
            },
            headers=owner,
        )
        assert question.status_code == 201
        question_id = question.json()["data"]["id"]

        option = await client.post(
            f"/questions/{question_id}/options", json={"option_text": "Sushi"}, headers=owner
        )
        assert option.status_code == 201
        assert option.json()["data"]["order"] == 3

        hidden = await client.get(f"/surveys/{survey_id}", headers=auth_headers(respondent))
        assert hidden.status_code == 403

        published = await client.post(f"/surveys/{survey_id}/publish", headers=owner)
        assert published.status_code == 200
        assert published.json()["data"]["status"] == "PUBLISHED"

        visible = await client.get(f"/surveys/{survey_id}", headers=auth_headers(respondent))
        assert visible.status_code == 200
        questions = visible.json()["data"]["questions"]
        assert [option["text"] for option in questions[0]["options"]] == ["Thai", "Pizza", "Sushi"]

        public_list = await client.get("/surveys")
        assert survey_id in [item["id"] for item in public_list.json()["data"]]

        public_detail = await client.get(f"/surveys/{survey_id}/public")
        assert public_detail.status_code == 200


@pytest.mark.asyncio
async def test_my_surveys_and_count(test_app, creator, other_creator, auth_headers, survey_factory):
    await survey_factory(creator)
    await survey_factory(creator, publish=True)
    await survey_factory(other_creator)

    async with _client(test_app) as client:
        mine = await client.get("/surveys/my", headers=auth_headers(creator))
        count = await client.get("/surveys/count", headers=auth_headers(creator))

    assert mine.status_code == 200
    assert len(mine.json()["data"]) == 2
    assert count.json()["data"] == {"count": 2}


@pytest.mark.asyncio
async def test_update_survey(test_app, creator, other_creator, auth_headers, survey_factory):
    survey = await survey_factory(creator, description="Before")

    async with _client(test_app) as client:
        updated = await client.put(
            f"/surveys/{survey.id}", json={"title": "After", "max_responses": 50}, headers=auth_headers(creator)
        )
        forbidden = await client.put(
            f"/surveys/{survey.id}", json={"title": "Hijack"}, headers=auth_headers(other_creator)
        )
        publish_via_update = await client.put(
            f"/surveys/{survey.id}", json={"status": "PUBLISHED"}, headers=auth_headers(creator)
        )

    assert updated.status_code == 200
    assert updated.json()["data"]["title"] == "After"
    assert updated.json()["data"]["description"] == "Before"
    assert updated.json()["data"]["max_responses"] == 50
    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "Forbidden: Not survey owner"
    assert publish_via_update.status_code == 400


@pytest.mark.asyncio
async def test_delete_survey(test_app, creator, auth_headers, survey_factory):
    survey = await survey_factory(creator)

    async with _client(test_app) as client:
        deleted = await client.delete(f"/surveys/{survey.id}", headers=auth_headers(creator))
        missing = await client.get(f"/surveys/{survey.id}", headers=auth_headers(creator))

    assert deleted.status_code == 200
    assert deleted.json() == {
        "success": True,
        "data": None,
        "error": None,
        "message": "Survey deleted successfully",
    }
    assert missing.status_code == 404
    assert missing.json()["error"] == "Survey not found"


@pytest.mark.asyncio
async def test_public_detail_of_draft_is_not_found(test_app, creator, survey_factory):
    survey = await survey_factory(creator)

    async with _client(test_app) as client:
        response = await client.get(f"/surveys/{survey.id}/public")

    assert response.status_code == 404
    assert response.json()["error"] == "Survey not found or not active"


@pytest.mark.asyncio
async def test_question_endpoints_validate_input(test_app, creator, auth_headers, survey_factory):
    survey = await survey_factory(creator)
    owner = auth_headers(creator)

    async with _client(test_app) as client:
        no_text = await client.post(f"/questions/survey/{survey.id}", json={"type": "TEXT"}, headers=owner)
        no_type = await client.post(f"/questions/survey/{survey.id}", json={"text": "Why?"}, headers=owner)
        missing = await client.put("/questions/999999", json={"text": "Why?", "type": "TEXT"}, headers=owner)

    assert no_text.status_code == 400
    assert no_text.json()["error"] == "Question text is required"
    assert no_type.status_code == 400
    assert no_type.json()["error"] == "Question type is required"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_and_delete_question(test_app, creator, auth_headers, survey_factory):
    survey = await survey_factory(creator, publish=True)
    question_id = survey.questions[1].id
    owner = auth_headers(creator)

    async with _client(test_app) as client:
        updated = await client.put(
            f"/questions/{question_id}",
            json={"text": "Pick a shade", "type": "RADIO", "order": 2, "options": [{"text": "Teal", "order": 1}]},
            headers=owner,
        )
        deleted = await client.delete(f"/questions/{question_id}", headers=owner)
        remaining = await client.get(f"/questions/survey/{survey.id}", headers=owner)

    assert updated.status_code == 200
    assert [option["text"] for option in updated.json()["data"]["options"]] == ["Teal"]
    assert deleted.status_code == 200
    assert [question["text"] for question in remaining.json()["data"]] == ["How are you?"]
