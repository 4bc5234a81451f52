"""
User and authentication schemas.
"""

from typing import Literal, Optional

from pydantic import EmailStr, Field, TypeAdapter, ValidationError, field_validator
from pydantic.networks import AnyUrl

from .base import RequestModel, StandardizedModel, UtcDatetime

_URL_ADAPTER = TypeAdapter(AnyUrl)


class UserSummary(StandardizedModel):
    """Minimal user representation embedded in other payloads."""

    id: str
    name: str
    email: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserPublic(StandardizedModel):
    id: str
    name: str
    email: str
    role: str
    profile_image_url: Optional[str] = None


class AuthUser(UserPublic):
    """User payload returned on register/login (never includes the password)."""

    created_at: UtcDatetime
    bio: Optional[str] = None
    tutor_id: Optional[str] = None


class LoginData(StandardizedModel):
    user: AuthUser
    token: str


class RegisterRequest(RequestModel):
    name: str = Field(..., min_length=2, description="Name must be at least 2 characters")
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")
    role: Literal["tutor", "learner"]
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None

    @field_validator("profile_image_url")
    @classmethod
    def validate_profile_image_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError as exc:
            raise ValueError("Invalid URL") from exc
        return value


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserUpdateRequest(RequestModel):
    """Profile update; presence and format rules live in ``UserService``."""

    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None


class PasswordUpdateRequest(RequestModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None
