"""Survey request and response schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from inquiro.models.base import SurveyStatus
from inquiro.schemas.base import BaseSchema
from inquiro.schemas.question import QuestionOut


class SurveyCreate(BaseModel):
    """Payload for creating a survey. Title presence is checked by the router."""

    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    is_public: bool = False
    allow_anonymous: bool = False
    max_responses: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class SurveyUpdate(BaseModel):
    """Partial survey update; only fields present in the request are applied."""

    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    is_public: Optional[bool] = None
    allow_anonymous: Optional[bool] = None
    max_responses: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[SurveyStatus] = None


class SurveySummary(BaseSchema):
    id: int
    title: str
    description: Optional[str] = None
    status: SurveyStatus
    is_public: bool
    allow_anonymous: bool
    max_responses: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    response_count: int
    creator_id: UUID
    created_at: datetime
    updated_at: datetime


class SurveyDetail(SurveySummary):
    """Survey with its ordered questions and their options."""

    questions: list[QuestionOut] = []
