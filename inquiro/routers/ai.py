"""AI survey drafting endpoint."""
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.database import get_db
from inquiro.dependencies import get_optional_user
from inquiro.models.user import User
from inquiro.schemas.ai import GeneratedSurvey, GenerateSurveyRequest
from inquiro.schemas.base import ApiResponse
from inquiro.schemas.survey import SurveyDetail
from inquiro.services import SurveyGenerator
from inquiro.services.access import require_creator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-survey", response_model=ApiResponse[Any])
async def generate_survey(
    request: GenerateSurveyRequest,
    response: Response,
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Draft a survey from a topic; with ``persist`` it is stored as a DRAFT survey."""
    require_creator(user)
    if not request.topic or not request.topic.strip():
        raise HTTPException(status_code=400, detail="Topic is required")

    generator = SurveyGenerator(db)
    draft = await generator.generate(
        request.topic.strip(),
        number_of_questions=request.number_of_questions,
        target_audience=request.target_audience,
        additional_context=request.additional_context,
    )

    if not request.persist:
        return ApiResponse[GeneratedSurvey](data=draft)

    survey = await generator.persist(draft, user)
    response.status_code = 201
    return ApiResponse[SurveyDetail](
        data=SurveyDetail.model_validate(survey),
        message="Survey generated successfully",
    )
