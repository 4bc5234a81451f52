# backend/app/api/dependencies/auth.py
"""
Authentication dependencies.

``verify_auth`` only checks the bearer token and exposes its claims;
``get_current_user`` additionally loads the account from the database.
"""

from dataclasses import dataclass
import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ...auth import PyJWTError, decode_access_token, extract_bearer_token
from ...database import get_db
from ...models.user import User
from ...repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

TOKEN_REQUIRED = "Authorization token required"
TOKEN_INVALID = "Invalid or expired token"


@dataclass(frozen=True)
class AuthContext:
    """Claims of a verified access token."""

    user_id: str
    email: str
    role: str

    @property
    def is_tutor(self) -> bool:
        return self.role == "tutor"


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_auth(request: Request) -> AuthContext:
    """Verify the bearer token of the current request."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    if not token:
        raise _unauthorized(TOKEN_REQUIRED)
    try:
        payload = decode_access_token(token)
    except PyJWTError as exc:
        logger.info("Rejected access token: %s", exc)
        raise _unauthorized(TOKEN_INVALID)
    return AuthContext(
        user_id=str(payload["userId"]),
        email=str(payload.get("email") or ""),
        role=str(payload.get("role") or ""),
    )


def get_current_user(
    auth: AuthContext = Depends(verify_auth),
    db: Session = Depends(get_db),
) -> User:
    """Load the user behind a verified token; unknown users are unauthorized."""
    user = UserRepository(db).get_by_id(auth.user_id)
    if user is None:
        raise _unauthorized(TOKEN_INVALID)
    return user
