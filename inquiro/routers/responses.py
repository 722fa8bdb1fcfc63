"""Survey response endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.database import get_db
from inquiro.dependencies import get_client_info, get_optional_user
from inquiro.models.user import User
from inquiro.schemas.base import ApiResponse
from inquiro.schemas.response import (
    AnswerOut,
    CountResponse,
    HasRespondedResponse,
    ResponseOut,
    SubmitResponseRequest,
)
from inquiro.services import ClientInfo, ResponseService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/submit", response_model=ApiResponse[ResponseOut], status_code=201)
async def submit_response(
    request: SubmitResponseRequest,
    user: User | None = Depends(get_optional_user),
    client_info: ClientInfo = Depends(get_client_info),
    db: AsyncSession = Depends(get_db),
):
    if not request.survey_id:
        raise HTTPException(status_code=400, detail="Survey ID is required")
    if not request.answers:
        raise HTTPException(status_code=400, detail="At least one answer is required")

    response = await ResponseService(db).submit_response(
        request.survey_id, request, user, client_info
    )
    return ApiResponse[ResponseOut](
        data=ResponseOut.model_validate(response),
        message="Response submitted successfully",
    )


@router.get("/survey/{survey_id}", response_model=ApiResponse[list[ResponseOut]])
async def list_responses(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    responses = await ResponseService(db).list_responses_by_survey(survey_id, user)
    return ApiResponse[list[ResponseOut]](
        data=[ResponseOut.model_validate(response) for response in responses]
    )


@router.get("/survey/{survey_id}/count", response_model=ApiResponse[CountResponse])
async def count_responses(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    count = await ResponseService(db).count_responses(survey_id, user)
    return ApiResponse[CountResponse](data=CountResponse(count=count))


@router.get("/survey/{survey_id}/has-responded", response_model=ApiResponse[HasRespondedResponse])
async def has_responded(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Anonymous callers always get ``false``."""
    responded = await ResponseService(db).has_responded(survey_id, user)
    return ApiResponse[HasRespondedResponse](data=HasRespondedResponse(has_responded=responded))


@router.get("/question/{question_id}/answers", response_model=ApiResponse[list[AnswerOut]])
async def list_answers(
    question_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    answers = await ResponseService(db).list_answers_by_question(question_id, user)
    return ApiResponse[list[AnswerOut]](
        data=[AnswerOut.model_validate(answer) for answer in answers]
    )


@router.get("/{response_id}", response_model=ApiResponse[ResponseOut])
async def get_response(
    response_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    response = await ResponseService(db).get_response_by_id(response_id, user)
    return ApiResponse[ResponseOut](data=ResponseOut.model_validate(response))
