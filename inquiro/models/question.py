"""Question and question option models."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from inquiro.database import Base
from inquiro.models.base import QuestionType, utcnow


class Question(Base):
    """A typed question positioned within one survey."""

    __tablename__ = "questions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    type = Column(
        SAEnum(QuestionType, name="question_type", native_enum=False, length=32),
        nullable=False,
    )
    is_required = Column(Boolean, nullable=False, default=False)
    order = Column(Integer, nullable=False, default=0)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    survey = relationship("Survey", back_populates="questions")
    options = relationship(
        "QuestionOption",
        back_populates="question",
        order_by="QuestionOption.order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    answers = relationship(
        "ResponseAnswer",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, survey_id={self.survey_id}, type={self.type}, order={self.order})>"


class QuestionOption(Base):
    """Selectable option of a choice-type question."""

    __tablename__ = "question_options"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(String(500), nullable=False)
    value = Column(String(255), nullable=True)
    order = Column(Integer, nullable=False, default=0)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    question = relationship("Question", back_populates="options")

    def __repr__(self) -> str:
        return f"<QuestionOption(id={self.id}, question_id={self.question_id}, order={self.order})>"
