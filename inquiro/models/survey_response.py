"""Survey response and answer models."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from inquiro.database import Base
from inquiro.models.base import get_uuid_column, utcnow


class SurveyResponse(Base):
    """One submission to a survey. Immutable once stored."""

    __tablename__ = "survey_responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(512), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    respondent_id = get_uuid_column(
        ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True, index=True
    )
    token_id = Column(Integer, ForeignKey("survey_tokens.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    survey = relationship("Survey", back_populates="responses")
    respondent = relationship("User")
    token = relationship("SurveyToken", back_populates="responses")
    answers = relationship(
        "ResponseAnswer",
        back_populates="response",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_survey_responses_survey_respondent", "survey_id", "respondent_id"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<SurveyResponse(id={self.id}, survey_id={self.survey_id}, "
            f"respondent_id={self.respondent_id}, is_anonymous={self.is_anonymous})>"
        )


class ResponseAnswer(Base):
    """Answer to a single question; exactly the value fields the client sent are populated."""

    __tablename__ = "response_answers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    text_value = Column(Text, nullable=True)
    number_value = Column(Float, nullable=True)
    date_value = Column(DateTime(timezone=True), nullable=True)
    boolean_value = Column(Boolean, nullable=True)
    selected_option_id = Column(
        Integer, ForeignKey("question_options.id", ondelete="SET NULL"), nullable=True
    )
    response_id = Column(
        Integer, ForeignKey("survey_responses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    response = relationship("SurveyResponse", back_populates="answers")
    question = relationship("Question", back_populates="answers")
    selected_option = relationship("QuestionOption")

    def __repr__(self) -> str:
        return f"<ResponseAnswer(id={self.id}, response_id={self.response_id}, question_id={self.question_id})>"
