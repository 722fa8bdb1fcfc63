"""HTTP cookie helpers for auth tokens."""
from fastapi import Response

from inquiro.config import get_settings


def _set_auth_cookie(response: Response, name: str, token: str, max_age: int) -> None:
    settings = get_settings()
    response.set_cookie(
        key=name,
        value=token,
        httponly=True,
        # Secure flag: only disable for local development
        secure=settings.environment != "development",
        samesite="lax",
        max_age=max_age,
        expires=max_age,
        path="/",
    )


def set_access_token_cookie(response: Response, token: str) -> None:
    """Set the access token cookie with secure defaults."""
    settings = get_settings()
    _set_auth_cookie(
        response,
        settings.access_token_cookie_name,
        token,
        settings.access_token_exp_minutes * 60,
    )


def set_refresh_cookie(response: Response, token: str) -> None:
    """Set the refresh token cookie with secure defaults."""
    settings = get_settings()
    _set_auth_cookie(
        response,
        settings.refresh_token_cookie_name,
        token,
        settings.refresh_token_exp_days * 24 * 60 * 60,
    )


def clear_auth_cookies(response: Response) -> None:
    """Remove both access and refresh token cookies from the client."""
    settings = get_settings()
    response.delete_cookie(key=settings.access_token_cookie_name, path="/")
    response.delete_cookie(key=settings.refresh_token_cookie_name, path="/")
