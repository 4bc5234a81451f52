# backend/app/auth.py
"""
Password hashing and JWT primitives.

Tokens are HS256 JWTs carrying ``userId``, ``email`` and ``role`` plus an
``exp`` claim; they live for ``settings.access_token_expire_minutes``.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWTError
from passlib.context import CryptContext

from .core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password
        hashed_password: The hashed password to compare against

    Returns:
        bool: True if password matches, False otherwise
    """
    try:
        return bool(pwd_context.verify(plain_password, hashed_password))
    except (ValueError, TypeError) as e:
        logger.error(f"Error verifying password: {str(e)}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return str(pwd_context.hash(password))


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: The claims to encode in the token
        expires_delta: Optional expiration time delta

    Returns:
        str: The encoded JWT token
    """
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire, "iat": datetime.now(timezone.utc)})
    return jwt.encode(to_encode, settings.secret_key.get_secret_value(), algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a JWT access token.

    Raises:
        PyJWTError: If the token is malformed, expired or has a bad signature
    """
    payload = jwt.decode(token, settings.secret_key.get_secret_value(), algorithms=[settings.algorithm])
    if not payload.get("userId"):
        raise jwt.InvalidTokenError("Token is missing userId")
    return payload


def extract_bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header[len("Bearer ") :].strip()
    return token or None


__all__ = [
    "PyJWTError",
    "create_access_token",
    "decode_access_token",
    "extract_bearer_token",
    "get_password_hash",
    "pwd_context",
    "verify_password",
]
