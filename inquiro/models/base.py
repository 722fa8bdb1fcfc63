"""Base utilities for SQLAlchemy models."""
from datetime import datetime, UTC
from enum import Enum
import uuid
from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.sql import sqltypes


class SurveyStatus(str, Enum):
    """Survey lifecycle status."""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"


class QuestionType(str, Enum):
    """Supported question input types."""
    TEXT = "TEXT"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"
    CHECKBOX = "CHECKBOX"
    RADIO = "RADIO"
    RATING = "RATING"
    DATE = "DATE"
    EMAIL = "EMAIL"
    NUMBER = "NUMBER"

    @property
    def is_choice(self) -> bool:
        return self in CHOICE_QUESTION_TYPES


CHOICE_QUESTION_TYPES = frozenset(
    {QuestionType.MULTIPLE_CHOICE, QuestionType.CHECKBOX, QuestionType.RADIO}
)


class UserRole(str, Enum):
    """Account role enumeration."""
    RESPONDENT = "RESPONDENT"
    CREATOR = "CREATOR"


def utcnow() -> datetime:
    return datetime.now(UTC)


class AdaptiveUUID(sqltypes.TypeDecorator):
    """UUID type stored natively on PostgreSQL and as hex text elsewhere."""

    impl = sqltypes.String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PGUUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    @staticmethod
    def _coerce_uuid(value):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))

    def process_bind_param(self, value, dialect):
        value = self._coerce_uuid(value)
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        return value.hex

    def process_result_value(self, value, dialect):
        return self._coerce_uuid(value)


def get_uuid_column(*args, **kwargs):
    """Get a UUID column that adapts to the database dialect.

    Args:
        *args: Positional arguments to pass to Column (e.g., ForeignKey)
        **kwargs: Keyword arguments to pass to Column (e.g., primary_key=True)

    Example:
        user_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
        creator_id = get_uuid_column(ForeignKey("users.user_id"), nullable=False)
    """
    return Column(AdaptiveUUID(), *args, **kwargs)
