"""User account management."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.models.base import UserRole
from inquiro.models.user import User
from inquiro.utils.passwords import (
    PasswordValidationError,
    hash_password,
    validate_password_strength,
    verify_password,
)

logger = logging.getLogger(__name__)


class UserServiceError(RuntimeError):
    """Raised when account operations fail."""


class RegistrationError(UserServiceError):
    """Raised when a new account cannot be created."""


class UserService:
    """Creates accounts and checks credentials."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def normalize_email(email: str) -> str:
        return email.strip().lower()

    async def get_user_by_id(self, user_id: uuid.UUID) -> User | None:
        return await self.db.get(User, user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == self.normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def register_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.RESPONDENT,
    ) -> User:
        """Create a new account with a bcrypt password hash."""
        try:
            validate_password_strength(password)
        except PasswordValidationError as exc:
            raise RegistrationError(str(exc)) from exc

        normalized_email = self.normalize_email(email)
        if await self.get_user_by_email(normalized_email):
            raise RegistrationError("email_taken")

        user = User(
            user_id=uuid.uuid4(),
            email=normalized_email,
            name=name.strip(),
            password_hash=hash_password(password),
            role=role,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise RegistrationError("email_taken") from exc
        await self.db.refresh(user)
        logger.info(f"Registered {role.value} account {user.user_id}")
        return user

    async def login_user(self, *, email: str, password: str) -> User:
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise UserServiceError("invalid_credentials")
        return user
