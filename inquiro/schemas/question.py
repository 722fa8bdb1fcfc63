"""Question and option schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from inquiro.models.base import QuestionType
from inquiro.schemas.base import BaseSchema


class OptionCreate(BaseModel):
    text: str = Field(min_length=1, max_length=500)
    value: Optional[str] = Field(default=None, max_length=255)
    order: int = 0


class QuestionCreate(BaseModel):
    """Payload for adding or replacing a question.

    On update the ``options`` list is the complete desired option set: every
    existing option is deleted and this list is inserted in its place.
    """

    text: Optional[str] = None
    description: Optional[str] = None
    type: Optional[QuestionType] = None
    is_required: bool = False
    order: int = 0
    options: Optional[list[OptionCreate]] = None


class OptionAdd(BaseModel):
    option_text: Optional[str] = Field(default=None, max_length=500)


class OptionOut(BaseSchema):
    id: int
    text: str
    value: Optional[str] = None
    order: int
    question_id: int
    created_at: datetime


class QuestionBrief(BaseSchema):
    id: int
    text: str
    description: Optional[str] = None
    type: QuestionType
    is_required: bool
    order: int
    survey_id: int


class QuestionOut(QuestionBrief):
    created_at: datetime
    updated_at: datetime
    options: list[OptionOut] = []
