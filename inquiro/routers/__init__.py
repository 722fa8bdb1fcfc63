"""API routers."""
from inquiro.routers import ai, auth, health, questions, responses, survey_tokens, surveys

__all__ = [
    "ai",
    "auth",
    "health",
    "questions",
    "responses",
    "survey_tokens",
    "surveys",
]
