"""Schemas for AI survey drafting."""
from typing import Optional

from pydantic import BaseModel, Field

from inquiro.models.base import QuestionType


class GenerateSurveyRequest(BaseModel):
    topic: Optional[str] = Field(default=None, max_length=500)
    number_of_questions: int = Field(default=5, ge=1)
    target_audience: str = Field(default="general public", max_length=200)
    additional_context: Optional[str] = Field(default=None, max_length=2000)
    persist: bool = False


class GeneratedOption(BaseModel):
    text: str


class GeneratedQuestion(BaseModel):
    text: str
    description: Optional[str] = None
    type: QuestionType
    is_required: bool = False
    options: Optional[list[GeneratedOption]] = None


class GeneratedSurvey(BaseModel):
    """Draft returned by the model before anything is stored."""

    title: str
    description: str = ""
    questions: list[GeneratedQuestion]
