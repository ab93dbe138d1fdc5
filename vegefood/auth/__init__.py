"""Authentication package."""
from .models import User, RegisterData, LoginData
from .session import create_session_token, decode_session_token
from .service import AuthService
from .validators import validate_registration, validate_login, is_valid_email

__all__ = [
    "User",
    "RegisterData",
    "LoginData",
    "create_session_token",
    "decode_session_token",
    "AuthService",
    "validate_registration",
    "validate_login",
    "is_valid_email",
]
