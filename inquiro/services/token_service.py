"""Survey token issuance and redemption."""
from __future__ import annotations

import logging
import secrets
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.config import get_settings
from inquiro.models.survey import Survey
from inquiro.models.survey_response import SurveyResponse
from inquiro.models.survey_token import SurveyToken
from inquiro.models.user import User
from inquiro.schemas.response import ResponsePayload
from inquiro.services.access import assert_ownership
from inquiro.services.errors import (
    InvalidTokenError,
    SurveyNotFoundError,
    TokenExhaustedError,
    TokenExpiredError,
    TokenNotFoundError,
)
from inquiro.services.response_service import ClientInfo, ResponseService
from inquiro.services.survey_service import survey_with_questions
from inquiro.utils.datetime_helpers import ensure_utc

logger = logging.getLogger(__name__)


class SurveyTokenService:
    """Opaque tokens that let a respondent reach one survey out of band."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()
        self.response_service = ResponseService(db)

    def _generate_token_value(self) -> str:
        return secrets.token_urlsafe(self.settings.survey_token_bytes)

    async def _get_usable_token(self, token: str, now: Optional[datetime] = None) -> SurveyToken:
        """Return an active, unexpired, unexhausted token or raise."""
        result = await self.db.execute(
            select(SurveyToken)
            .where(SurveyToken.token == token)
            .where(SurveyToken.is_active.is_(True))
            .execution_options(populate_existing=True)
        )
        survey_token = result.scalar_one_or_none()
        if survey_token is None:
            raise InvalidTokenError()
        if survey_token.is_expired(now):
            raise TokenExpiredError()
        if survey_token.is_exhausted():
            raise TokenExhaustedError()
        return survey_token

    async def issue_token(
        self,
        survey_id: int,
        identity: User | None,
        expires_at: Optional[datetime] = None,
        max_uses: Optional[int] = None,
    ) -> SurveyToken:
        await assert_ownership(self.db, survey_id, identity)
        survey_token = SurveyToken(
            survey_id=survey_id,
            token=self._generate_token_value(),
            is_active=True,
            expires_at=ensure_utc(expires_at),
            max_uses=max_uses,
            current_uses=0,
        )
        self.db.add(survey_token)
        await self.db.commit()
        await self.db.refresh(survey_token)
        logger.info(f"Issued token {survey_token.id} for survey {survey_id} (max_uses={max_uses})")
        return survey_token

    async def list_tokens_by_survey(self, survey_id: int, identity: User | None) -> list[SurveyToken]:
        await assert_ownership(self.db, survey_id, identity)
        result = await self.db.execute(
            select(SurveyToken)
            .where(SurveyToken.survey_id == survey_id)
            .order_by(SurveyToken.created_at.desc(), SurveyToken.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def resolve_token(self, token: str, now: Optional[datetime] = None) -> Survey:
        """Return the token's survey with questions and options."""
        survey_token = await self._get_usable_token(token, now)
        result = await self.db.execute(
            survey_with_questions()
            .where(Survey.id == survey_token.survey_id)
            .execution_options(populate_existing=True)
        )
        survey = result.scalar_one_or_none()
        if survey is None:
            raise SurveyNotFoundError()
        return survey

    async def submit_via_token(
        self,
        token: str,
        payload: ResponsePayload,
        identity: User | None,
        client_info: ClientInfo,
        now: Optional[datetime] = None,
    ) -> SurveyResponse:
        """Submit a response through a token and count the use.

        The response insert and the use increment share one transaction; if
        the token runs out between the check and the increment the response
        is rolled back too.
        """
        survey_token = await self._get_usable_token(token, now)
        token_id = survey_token.id
        survey_id = survey_token.survey_id

        response = await self.response_service.submit_response(
            survey_id,
            payload,
            identity,
            client_info,
            token_id=token_id,
            commit=False,
            now=now,
        )
        response_id = response.id

        result = await self.db.execute(
            update(SurveyToken)
            .where(SurveyToken.id == token_id)
            .where(SurveyToken.is_active.is_(True))
            .where(
                or_(
                    SurveyToken.max_uses.is_(None),
                    SurveyToken.current_uses < SurveyToken.max_uses,
                )
            )
            .values(current_uses=SurveyToken.current_uses + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            await self.db.rollback()
            logger.warning(f"Token {token_id} exhausted during submission to survey {survey_id}")
            raise TokenExhaustedError()

        await self.db.commit()
        logger.info(f"Response {response_id} stored for survey {survey_id} via token {token_id}")
        return await self.response_service.get_stored_response(response_id)

    async def deactivate_token(self, token_id: int, identity: User | None) -> SurveyToken:
        survey_token = await self.db.get(SurveyToken, token_id)
        if survey_token is None:
            raise TokenNotFoundError()
        await assert_ownership(self.db, survey_token.survey_id, identity)

        survey_token.is_active = False
        await self.db.commit()
        await self.db.refresh(survey_token)
        logger.info(f"Token {token_id} deactivated")
        return survey_token
