"""
Gallery credentials.

The gallery password is stored only as a bcrypt hash (GALLERY_PASSWORD_HASH).
A successful login yields a short-lived JWT whose ``scope`` claim must be
``gallery`` for the capture endpoints to accept it.
"""

# Standard library imports
import time
from typing import Any, Dict, Tuple

# External package imports
import bcrypt
import jwt
from jwt.exceptions import InvalidTokenError

# Local application imports
from .config import get_settings

GALLERY_SCOPE = "gallery"


def hash_password(plain_password: str) -> str:
    """bcrypt hash suitable for GALLERY_PASSWORD_HASH."""
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password, an empty hash or a hash bcrypt cannot read."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def issue_gallery_token() -> Tuple[str, int]:
    """
    Sign a gallery access token.

    Returns:
        (token, lifetime in seconds)
    """
    settings = get_settings()
    lifetime = settings.access_token_expire_minutes * 60
    issued_at = int(time.time())
    claims = {
        "sub": GALLERY_SCOPE,
        "scope": GALLERY_SCOPE,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    token = jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return token, lifetime


def verify_gallery_token(token: str) -> Dict[str, Any]:
    """
    Decode a bearer token and check it grants gallery access.

    Raises:
        ValueError: If the token is tampered, expired or carries another scope
    """
    settings = get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except InvalidTokenError as e:
        raise ValueError(f"Invalid token: {e}") from e
    if claims.get("scope") != GALLERY_SCOPE:
        raise ValueError("Token does not grant gallery access")
    return claims
