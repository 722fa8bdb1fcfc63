"""FastAPI dependencies."""
import logging

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.config import get_settings
from inquiro.database import get_db
from inquiro.models.user import User
from inquiro.services.auth_service import AuthService, AuthError
from inquiro.services.response_service import ClientInfo

logger = logging.getLogger(__name__)


settings = get_settings()


async def get_current_user(
        request: Request,
        authorization: str | None = Header(default=None, alias="Authorization"),
        db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the current authenticated user via JWT access token.

    Checks for access token in the following order:
    1. HTTP-only cookie (preferred, secure)
    2. Authorization header (API clients)
    """

    # Try to get token from cookie first (preferred method)
    token = request.cookies.get(settings.access_token_cookie_name)
    token_source = "cookie"

    # Fall back to Authorization header if no cookie
    if not token and authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise HTTPException(status_code=401, detail="invalid_authorization_header")
        token_source = "header"

    if not token:
        raise HTTPException(status_code=401, detail="Unauthorized")

    auth_service = AuthService(db)
    try:
        user = await auth_service.get_user_from_access_token(token)
    except AuthError as exc:
        detail = "token_expired" if str(exc) == "token_expired" else "invalid_token"
        raise HTTPException(status_code=401, detail=detail) from exc

    logger.debug(f"Authenticated user via JWT {token_source}: {user.user_id} ({user.role.value})")
    return user


async def get_optional_user(
        request: Request,
        authorization: str | None = Header(default=None, alias="Authorization"),
        db: AsyncSession = Depends(get_db),
) -> User | None:
    """Return the current user if available, otherwise None for auth failures."""
    try:
        return await get_current_user(request, authorization, db)
    except HTTPException as exc:
        if exc.status_code == 401:
            return None
        raise


def get_client_info(request: Request) -> ClientInfo:
    """Client IP (first X-Forwarded-For hop, then X-Real-IP, then the socket peer) and user agent."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for and forwarded_for.split(",")[0].strip():
        ip_address = forwarded_for.split(",")[0].strip()
    elif request.headers.get("x-real-ip"):
        ip_address = request.headers["x-real-ip"].strip()
    elif request.client and request.client.host:
        ip_address = request.client.host
    else:
        ip_address = "unknown"

    return ClientInfo(
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent", "unknown"),
    )
