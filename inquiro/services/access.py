"""Authorization predicates shared by every data-access service."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.models.base import UserRole
from inquiro.models.survey import Survey
from inquiro.models.user import User
from inquiro.services.errors import ForbiddenError, SurveyNotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)

CREATOR_REQUIRED = "Forbidden: Creator role required"
NOT_OWNER = "Forbidden: Not survey owner"


def require_user(identity: User | None) -> User:
    """Return the identity or raise when the caller is anonymous."""
    if identity is None:
        raise UnauthorizedError()
    return identity


def require_creator(identity: User | None) -> User:
    """Return the identity if it holds the creator role."""
    user = require_user(identity)
    if user.role != UserRole.CREATOR:
        raise ForbiddenError(CREATOR_REQUIRED)
    return user


async def assert_ownership(db: AsyncSession, survey_id: int, identity: User | None) -> Survey:
    """Load a survey and make sure ``identity`` created it.

    Raises:
        UnauthorizedError: no identity
        ForbiddenError: identity is not a creator, or not this survey's creator
        SurveyNotFoundError: no survey with that id
    """
    user = require_creator(identity)
    survey = await db.get(Survey, survey_id)
    if survey is None:
        raise SurveyNotFoundError()
    if survey.creator_id != user.user_id:
        logger.warning(f"User {user.user_id} denied access to survey {survey_id}")
        raise ForbiddenError(NOT_OWNER)
    return survey
