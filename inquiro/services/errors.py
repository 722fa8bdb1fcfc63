"""Service-layer exceptions.

Each error carries the user-facing message the API returns verbatim. The
HTTP layer maps error classes to status codes; services never deal with
status codes themselves.
"""
from __future__ import annotations


class InquiroError(RuntimeError):
    """Base class for expected, user-facing failures."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UnauthorizedError(InquiroError):
    default_message = "Unauthorized"


class ForbiddenError(InquiroError):
    default_message = "Forbidden: Access denied"


class NotFoundError(InquiroError):
    default_message = "Not found"


class SurveyNotFoundError(NotFoundError):
    default_message = "Survey not found"


class QuestionNotFoundError(NotFoundError):
    default_message = "Question not found"


class ResponseNotFoundError(NotFoundError):
    default_message = "Response not found"


class TokenNotFoundError(NotFoundError):
    default_message = "Token not found"


class InvalidTokenError(NotFoundError):
    default_message = "Invalid or inactive token"


class AnonymousNotAllowedError(InquiroError):
    default_message = "Anonymous responses not allowed for this survey"


class InvalidStateError(InquiroError):
    default_message = "Invalid state"


class PublishWithoutQuestionsError(InvalidStateError):
    default_message = "Cannot publish survey without questions"


class InvalidSurveyUpdateError(InvalidStateError):
    default_message = "Invalid survey update"


class SurveyNotStartedError(InvalidStateError):
    default_message = "Survey has not started yet"


class SurveyEndedError(InvalidStateError):
    default_message = "Survey has ended"


class ResponseLimitReachedError(InvalidStateError):
    default_message = "Survey has reached maximum responses"


class RequiredQuestionMissingError(InvalidStateError):
    default_message = "Required question must be answered"

    def __init__(self, question_text: str | None = None):
        message = (
            f'Required question "{question_text}" must be answered'
            if question_text is not None
            else None
        )
        super().__init__(message)
        self.question_text = question_text


class InvalidAnswerError(InvalidStateError):
    default_message = "Answer does not match a question of this survey"


class TokenGoneError(InquiroError):
    default_message = "Token is no longer valid"


class TokenExpiredError(TokenGoneError):
    default_message = "Token has expired"


class TokenExhaustedError(TokenGoneError):
    default_message = "Token has reached maximum uses"
