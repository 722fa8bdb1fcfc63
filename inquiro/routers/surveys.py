"""Survey endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.database import get_db
from inquiro.dependencies import get_optional_user
from inquiro.models.user import User
from inquiro.schemas.base import ApiResponse
from inquiro.schemas.response import CountResponse
from inquiro.schemas.survey import SurveyCreate, SurveyDetail, SurveySummary, SurveyUpdate
from inquiro.services import SurveyService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ApiResponse[list[SurveySummary]])
async def list_public_surveys(db: AsyncSession = Depends(get_db)):
    """Published, public surveys that are currently open."""
    surveys = await SurveyService(db).list_public_surveys()
    return ApiResponse[list[SurveySummary]](
        data=[SurveySummary.model_validate(survey) for survey in surveys]
    )


@router.get("/my", response_model=ApiResponse[list[SurveySummary]])
async def list_my_surveys(
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    surveys = await SurveyService(db).list_surveys_by_owner(user)
    return ApiResponse[list[SurveySummary]](
        data=[SurveySummary.model_validate(survey) for survey in surveys]
    )


@router.get("/count", response_model=ApiResponse[CountResponse])
async def count_my_surveys(
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    count = await SurveyService(db).count_surveys_by_owner(user)
    return ApiResponse[CountResponse](data=CountResponse(count=count))


@router.post("", response_model=ApiResponse[SurveyDetail], status_code=201)
async def create_survey(
    request: SurveyCreate,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    if not request.title or not request.title.strip():
        raise HTTPException(status_code=400, detail="Title is required")

    survey = await SurveyService(db).create_survey(request, user)
    return ApiResponse[SurveyDetail](
        data=SurveyDetail.model_validate(survey),
        message="Survey created successfully",
    )


@router.get("/{survey_id}", response_model=ApiResponse[SurveyDetail])
async def get_survey(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    survey = await SurveyService(db).get_survey_by_id(survey_id, user)
    return ApiResponse[SurveyDetail](data=SurveyDetail.model_validate(survey))


@router.put("/{survey_id}", response_model=ApiResponse[SurveyDetail])
async def update_survey(
    survey_id: int,
    request: SurveyUpdate,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    survey = await SurveyService(db).update_survey(survey_id, request, user)
    return ApiResponse[SurveyDetail](
        data=SurveyDetail.model_validate(survey),
        message="Survey updated successfully",
    )


@router.delete("/{survey_id}", response_model=ApiResponse[None])
async def delete_survey(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    await SurveyService(db).delete_survey(survey_id, user)
    return ApiResponse[None](message="Survey deleted successfully")


@router.post("/{survey_id}/publish", response_model=ApiResponse[SurveyDetail])
async def publish_survey(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    survey = await SurveyService(db).publish_survey(survey_id, user)
    return ApiResponse[SurveyDetail](
        data=SurveyDetail.model_validate(survey),
        message="Survey published successfully",
    )


@router.get("/{survey_id}/public", response_model=ApiResponse[SurveyDetail])
async def get_active_survey(survey_id: int, db: AsyncSession = Depends(get_db)):
    """Open survey for respondents; no login needed."""
    survey = await SurveyService(db).get_active_survey_by_id(survey_id)
    return ApiResponse[SurveyDetail](data=SurveyDetail.model_validate(survey))
