"""Survey response submission and read schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from inquiro.schemas.base import BaseSchema
from inquiro.schemas.question import OptionOut, QuestionBrief


class AnswerIn(BaseModel):
    """One answer; populate the value field matching the question type."""

    question_id: int
    text_value: Optional[str] = None
    number_value: Optional[float] = None
    date_value: Optional[datetime] = None
    boolean_value: Optional[bool] = None
    selected_option_id: Optional[int] = None


class ResponsePayload(BaseModel):
    is_anonymous: bool = False
    answers: list[AnswerIn] = []


class SubmitResponseRequest(ResponsePayload):
    survey_id: Optional[int] = None


class AnswerOut(BaseSchema):
    id: int
    response_id: int
    question_id: int
    text_value: Optional[str] = None
    number_value: Optional[float] = None
    date_value: Optional[datetime] = None
    boolean_value: Optional[bool] = None
    selected_option_id: Optional[int] = None
    created_at: datetime
    question: Optional[QuestionBrief] = None
    selected_option: Optional[OptionOut] = None


class ResponseOut(BaseSchema):
    id: int
    survey_id: int
    respondent_id: Optional[UUID] = None
    token_id: Optional[int] = None
    is_anonymous: bool
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    answers: list[AnswerOut] = []


class CountResponse(BaseSchema):
    count: int


class HasRespondedResponse(BaseSchema):
    has_responded: bool
