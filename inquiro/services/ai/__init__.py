"""AI survey drafting."""
from inquiro.services.ai.survey_generator import (
    AIServiceUnavailableError,
    SurveyGenerationError,
    SurveyGenerator,
)

__all__ = ["AIServiceUnavailableError", "SurveyGenerationError", "SurveyGenerator"]
