"""Database models."""
from inquiro.models.base import CHOICE_QUESTION_TYPES, QuestionType, SurveyStatus, UserRole
from inquiro.models.user import User
from inquiro.models.refresh_token import RefreshToken
from inquiro.models.survey import Survey
from inquiro.models.question import Question, QuestionOption
from inquiro.models.survey_token import SurveyToken
from inquiro.models.survey_response import SurveyResponse, ResponseAnswer

__all__ = [
    "CHOICE_QUESTION_TYPES",
    "QuestionType",
    "SurveyStatus",
    "UserRole",
    "User",
    "RefreshToken",
    "Survey",
    "Question",
    "QuestionOption",
    "SurveyToken",
    "SurveyResponse",
    "ResponseAnswer",
]
