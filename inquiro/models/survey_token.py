"""Survey access token model."""
from __future__ import annotations

from datetime import datetime, UTC

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from inquiro.database import Base
from inquiro.models.base import utcnow


class SurveyToken(Base):
    """Opaque credential granting out-of-band access to one survey."""

    __tablename__ = "survey_tokens"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(128), unique=True, nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    max_uses = Column(Integer, nullable=True)
    current_uses = Column(Integer, nullable=False, default=0)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    survey = relationship("Survey", back_populates="tokens")
    responses = relationship("SurveyResponse", back_populates="token", passive_deletes=True)

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        expires_at = self.expires_at
        # SQLite stores timestamps without timezone info; normalize to UTC so comparisons work.
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at < (now or datetime.now(UTC))

    def is_exhausted(self) -> bool:
        return self.max_uses is not None and self.current_uses >= self.max_uses

    def __repr__(self) -> str:
        return f"<SurveyToken(id={self.id}, survey_id={self.survey_id}, uses={self.current_uses}/{self.max_uses})>"
