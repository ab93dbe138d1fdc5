"""
Form validators for registration and login.

Each validator returns the first user-facing error message, or None when the
input is acceptable. They never raise.
"""
import re
from typing import Optional

from vegefood.errors import (
    ERROR_FIELDS_REQUIRED,
    ERROR_FILL_ALL_FIELDS,
    ERROR_INVALID_EMAIL,
    ERROR_PASSWORD_MISMATCH,
    ERROR_WEAK_PASSWORD,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def validate_registration(
    username: str,
    email: str,
    password: str,
    confirm_password: str,
) -> Optional[str]:
    if not username or not email or not password or not confirm_password:
        return ERROR_FIELDS_REQUIRED
    if not is_valid_email(email):
        return ERROR_INVALID_EMAIL
    if len(password) < MIN_PASSWORD_LENGTH:
        return ERROR_WEAK_PASSWORD
    if password != confirm_password:
        return ERROR_PASSWORD_MISMATCH
    return None


def validate_login(email: str, password: str) -> Optional[str]:
    if not email or not password:
        return ERROR_FILL_ALL_FIELDS
    if not is_valid_email(email):
        return ERROR_INVALID_EMAIL
    return None
