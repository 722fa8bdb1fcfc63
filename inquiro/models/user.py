"""User account model."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Enum as SAEnum, String
from sqlalchemy.orm import relationship

from inquiro.database import Base
from inquiro.models.base import UserRole, get_uuid_column, utcnow


class User(Base):
    """Account that either authors surveys (creator) or answers them (respondent)."""

    __tablename__ = "users"

    user_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(120), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        SAEnum(UserRole, name="user_role", native_enum=False, length=20),
        nullable=False,
        default=UserRole.RESPONDENT,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_login_date = Column(DateTime(timezone=True), nullable=True)

    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def is_creator(self) -> bool:
        return self.role == UserRole.CREATOR

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, email={self.email}, role={self.role})>"
