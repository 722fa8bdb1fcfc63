"""Question endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.database import get_db
from inquiro.dependencies import get_optional_user
from inquiro.models.user import User
from inquiro.schemas.base import ApiResponse
from inquiro.schemas.question import OptionAdd, OptionOut, QuestionCreate, QuestionOut
from inquiro.services import QuestionService

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_question_fields(request: QuestionCreate) -> None:
    if not request.text or not request.text.strip():
        raise HTTPException(status_code=400, detail="Question text is required")
    if request.type is None:
        raise HTTPException(status_code=400, detail="Question type is required")


@router.get("/survey/{survey_id}", response_model=ApiResponse[list[QuestionOut]])
async def list_questions(
    survey_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    questions = await QuestionService(db).list_questions_by_survey(survey_id, user)
    return ApiResponse[list[QuestionOut]](
        data=[QuestionOut.model_validate(question) for question in questions]
    )


@router.post("/survey/{survey_id}", response_model=ApiResponse[QuestionOut], status_code=201)
async def add_question(
    survey_id: int,
    request: QuestionCreate,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    _require_question_fields(request)
    question = await QuestionService(db).add_question(survey_id, request, user)
    return ApiResponse[QuestionOut](
        data=QuestionOut.model_validate(question),
        message="Question added successfully",
    )


@router.get("/{question_id}", response_model=ApiResponse[QuestionOut])
async def get_question(
    question_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    question = await QuestionService(db).get_question_by_id(question_id, user)
    return ApiResponse[QuestionOut](data=QuestionOut.model_validate(question))


@router.put("/{question_id}", response_model=ApiResponse[QuestionOut])
async def update_question(
    question_id: int,
    request: QuestionCreate,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Update a question; the request's options replace all existing ones."""
    _require_question_fields(request)
    question = await QuestionService(db).update_question(question_id, request, user)
    return ApiResponse[QuestionOut](
        data=QuestionOut.model_validate(question),
        message="Question updated successfully",
    )


@router.delete("/{question_id}", response_model=ApiResponse[None])
async def delete_question(
    question_id: int,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    await QuestionService(db).delete_question(question_id, user)
    return ApiResponse[None](message="Question deleted successfully")


@router.post("/{question_id}/options", response_model=ApiResponse[OptionOut], status_code=201)
async def add_option(
    question_id: int,
    request: OptionAdd,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    if not request.option_text or not request.option_text.strip():
        raise HTTPException(status_code=400, detail="Option text is required")

    option = await QuestionService(db).add_option_to_question(question_id, request.option_text, user)
    return ApiResponse[OptionOut](
        data=OptionOut.model_validate(option),
        message="Option added successfully",
    )
