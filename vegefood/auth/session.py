"""
Session token codec.

The token is base64("<email>:<epoch millis>"). It is a marker that a login
happened, not a credential: it carries no signature and never expires.
"""
import base64
import binascii
import time
from typing import Optional, Tuple


def create_session_token(email: str, issued_at_ms: Optional[int] = None) -> str:
    """Encode an email and issue time into an opaque token."""
    if issued_at_ms is None:
        issued_at_ms = int(time.time() * 1000)
    raw = f"{email}:{issued_at_ms}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def decode_session_token(token: str) -> Optional[Tuple[str, int]]:
    """Return (email, issued_at_ms), or None if the token is not one of ours."""
    try:
        raw = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    email, sep, issued = raw.rpartition(":")
    if not sep or not email or not issued.isdigit():
        return None
    return email, int(issued)
