"""Survey aggregate root model."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Enum as SAEnum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from inquiro.database import Base
from inquiro.models.base import SurveyStatus, get_uuid_column, utcnow


class Survey(Base):
    """Survey owned by a creator; questions, responses and tokens hang off it."""

    __tablename__ = "surveys"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        SAEnum(SurveyStatus, name="survey_status", native_enum=False, length=20),
        nullable=False,
        default=SurveyStatus.DRAFT,
        index=True,
    )
    is_public = Column(Boolean, nullable=False, default=False)
    allow_anonymous = Column(Boolean, nullable=False, default=False)
    max_responses = Column(Integer, nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)
    # Bumped by a conditional UPDATE on every accepted submission so the cap
    # check and the reservation happen in one statement.
    response_count = Column(Integer, nullable=False, default=0)
    creator_id = get_uuid_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    creator = relationship("User")
    questions = relationship(
        "Question",
        back_populates="survey",
        order_by="Question.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    responses = relationship(
        "SurveyResponse",
        back_populates="survey",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    tokens = relationship(
        "SurveyToken",
        back_populates="survey",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_surveys_public_listing", "status", "is_public"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Survey(id={self.id}, title={self.title!r}, status={self.status})>"
