import re
from dataclasses import dataclass

from flask_login import current_user
from passlib.hash import bcrypt
from quizhub.config import config


EMAIL_REGEX = re.compile(r"^[^@]+@[^@]+\.[^@]+$")


@dataclass(frozen=True)
class Principal:
    """Caller identity as seen by the quiz workflow."""

    user_id: int
    role: str


def current_principal() -> Principal:
    """Build the principal for the logged-in user of this request."""
    return Principal(user_id=current_user.id, role=current_user.role)


def _truncate_password(plain_password: str) -> str:
    """Helper to consistently truncate password to its first 72 UTF-8 bytes."""
    password_bytes = plain_password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(plain_password: str) -> str:
    """
    Hash password using bcrypt. It is truncated to the first 72 bytes
    of its UTF-8 encoding before hashing.
    """
    return bcrypt.hash(_truncate_password(plain_password))


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against a hash, using the same truncation as hash_password."""
    return bcrypt.verify(_truncate_password(plain_password), password_hash)


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_REGEX.match(email))


def validate_password(password: str) -> tuple[bool, str | None]:
    """
    Basic server-side password validation.
    Returns (is_valid, error_message).
    """
    min_length = config.MIN_PASSWORD_LENGTH
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters long"
    return True, None
