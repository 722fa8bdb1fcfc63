"""Survey token endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.database import get_db
from inquiro.dependencies import get_client_info, get_optional_user
from inquiro.models.user import User
from inquiro.schemas.base import ApiResponse
from inquiro.schemas.response import ResponseOut, ResponsePayload
from inquiro.schemas.survey import SurveyDetail
from inquiro.schemas.token import SurveyTokenOut, TokenCreate
from inquiro.services import ClientInfo, SurveyTokenService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/survey/{survey_id}", response_model=ApiResponse[SurveyTokenOut], status_code=201)
async def issue_token(
    survey_id: int,
    request: TokenCreate | None = None,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    request = request or TokenCreate()
    survey_token = await SurveyTokenService(db).issue_token(
        survey_id, user, expires_at=request.expires_at, max_uses=request.max_uses
    )
    return ApiResponse[SurveyTokenOut](
        data=SurveyTokenOut.model_validate(survey_token),
        message="Token created successfully",
    )


@router.get("/survey/{survey_id}", response_model=ApiResponse[list[SurveyTokenOut]])
async def list_tokens(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    tokens = await SurveyTokenService(db).list_tokens_by_survey(survey_id, user)
    return ApiResponse[list[SurveyTokenOut]](
        data=[SurveyTokenOut.model_validate(survey_token) for survey_token in tokens]
    )


@router.get("/{token}/survey", response_model=ApiResponse[SurveyDetail])
async def resolve_token(token: str, db: AsyncSession = Depends(get_db)):
    survey = await SurveyTokenService(db).resolve_token(token)
    return ApiResponse[SurveyDetail](data=SurveyDetail.model_validate(survey))


@router.post("/{token}/respond", response_model=ApiResponse[ResponseOut], status_code=201)
async def respond_via_token(
    token: str,
    request: ResponsePayload,
    user: User | None = Depends(get_optional_user),
    client_info: ClientInfo = Depends(get_client_info),
    db: AsyncSession = Depends(get_db),
):
    if not request.answers:
        raise HTTPException(status_code=400, detail="At least one answer is required")

    response = await SurveyTokenService(db).submit_via_token(token, request, user, client_info)
    return ApiResponse[ResponseOut](
        data=ResponseOut.model_validate(response),
        message="Response submitted successfully",
    )


@router.post("/{token_id}/deactivate", response_model=ApiResponse[SurveyTokenOut])
async def deactivate_token(
    token_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    survey_token = await SurveyTokenService(db).deactivate_token(token_id, user)
    return ApiResponse[SurveyTokenOut](
        data=SurveyTokenOut.model_validate(survey_token),
        message="Token deactivated successfully",
    )
