"""Authentication endpoints."""
import logging

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inquiro.config import get_settings
from inquiro.database import get_db
from inquiro.dependencies import get_current_user
from inquiro.models.user import User
from inquiro.schemas.auth import (
    AuthTokenResponse,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    RegisterRequest,
    UserOut,
)
from inquiro.schemas.base import ApiResponse
from inquiro.services import AuthService, AuthError, RegistrationError
from inquiro.utils.cookies import (
    clear_auth_cookies,
    set_access_token_cookie,
    set_refresh_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


async def _complete_login(
    user: User,
    response: Response,
    db: AsyncSession,
) -> ApiResponse[AuthTokenResponse]:
    """Issue tokens, set cookies and build the login payload."""
    auth_service = AuthService(db)
    access_token, refresh_token, expires_in = await auth_service.issue_tokens(user)
    set_access_token_cookie(response, access_token)
    set_refresh_cookie(response, refresh_token)

    return ApiResponse[AuthTokenResponse](
        data=AuthTokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type="bearer",
            expires_in=expires_in,
            user=UserOut.model_validate(user),
        )
    )


@router.post("/register", response_model=ApiResponse[AuthTokenResponse], status_code=201)
async def register(
    request: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create an account and log it in."""
    auth_service = AuthService(db)
    try:
        user = await auth_service.register_user(
            request.email, request.password, request.name, request.role
        )
    except RegistrationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return await _complete_login(user, response, db)


@router.post("/login", response_model=ApiResponse[AuthTokenResponse])
async def login(
    request: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Authenticate via email/password and issue JWT tokens."""
    auth_service = AuthService(db)
    try:
        user = await auth_service.authenticate_user(request.email, request.password)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return await _complete_login(user, response, db)


@router.post("/refresh", response_model=ApiResponse[AuthTokenResponse])
async def refresh_tokens(
    request: RefreshRequest,
    response: Response,
    refresh_cookie: str | None = Cookie(
        default=None, alias=settings.refresh_token_cookie_name
    ),
    db: AsyncSession = Depends(get_db),
):
    """Exchange a refresh token for new JWT credentials."""
    token = request.refresh_token or refresh_cookie
    if not token:
        raise HTTPException(status_code=401, detail="missing_refresh_token")

    auth_service = AuthService(db)
    try:
        user, access_token, new_refresh_token, expires_in = await auth_service.exchange_refresh_token(token)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    set_access_token_cookie(response, access_token)
    set_refresh_cookie(response, new_refresh_token)

    return ApiResponse[AuthTokenResponse](
        data=AuthTokenResponse(
            access_token=access_token,
            refresh_token=new_refresh_token,
            token_type="bearer",
            expires_in=expires_in,
            user=UserOut.model_validate(user),
        )
    )


@router.post("/logout", status_code=204)
async def logout(
    request: LogoutRequest,
    response: Response,
    refresh_cookie: str | None = Cookie(
        default=None, alias=settings.refresh_token_cookie_name
    ),
    db: AsyncSession = Depends(get_db),
) -> None:
    """Invalidate the provided refresh token and clear cookies."""
    token = request.refresh_token or refresh_cookie
    if token:
        auth_service = AuthService(db)
        await auth_service.revoke_refresh_token(token)

    clear_auth_cookies(response)
    response.status_code = 204
    return None


@router.get("/me", response_model=ApiResponse[UserOut])
async def me(user: User = Depends(get_current_user)):
    return ApiResponse[UserOut](data=UserOut.model_validate(user))
