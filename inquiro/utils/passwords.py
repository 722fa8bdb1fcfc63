"""Password policy and bcrypt hashing."""
from __future__ import annotations

import bcrypt

from inquiro.config import get_settings

MIN_PASSWORD_LENGTH = 8
# bcrypt only looks at the first 72 bytes and recent releases refuse longer input
MAX_PASSWORD_BYTES = 72


class PasswordValidationError(ValueError):
    """Raised when a password does not meet the account password policy."""


def validate_password_strength(password: str) -> None:
    """Check a new account password.

    Accepted passwords have at least 8 characters, upper and lower case
    letters and a digit, and fit in bcrypt's 72 byte input.

    Raises:
        PasswordValidationError: with the first rule the password breaks.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PasswordValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long."
        )
    if not any(char.islower() for char in password) or not any(char.isupper() for char in password):
        raise PasswordValidationError(
            "Password must include both uppercase and lowercase letters."
        )
    if not any(char.isdigit() for char in password):
        raise PasswordValidationError("Password must include at least one number.")


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of ``password`` against a stored hash; False for unusable input."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))
    except ValueError:
        return False
