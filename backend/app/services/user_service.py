# backend/app/services/user_service.py
"""
User account management: profile edits and password changes.

Both operations are self-service only; the caller's id comes from the
verified token and must match the target account.
"""

import logging
from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from ..auth import get_password_hash, verify_password
from ..core.exceptions import (
    AuthenticationException,
    ConflictException,
    DuplicateRecordException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..models.user import User
from ..repositories.factory import RepositoryFactory
from ..schemas.user import PasswordUpdateRequest, UserUpdateRequest
from .base import BaseService

logger = logging.getLogger(__name__)

_EMAIL_ADAPTER = TypeAdapter(EmailStr)
MIN_PASSWORD_LENGTH = 6


class UserService(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    @BaseService.measure_operation("update_user_profile")
    def update_profile(self, actor_id: str, user_id: str, data: UserUpdateRequest) -> User:
        if actor_id != user_id:
            raise ForbiddenException("You can only update your own profile")

        name = (data.name or "").strip()
        if not name:
            raise ValidationException("Name is required")

        email = (data.email or "").strip()
        try:
            _EMAIL_ADAPTER.validate_python(email)
        except ValidationError as exc:
            raise ValidationException("Valid email is required") from exc

        existing = self.user_repository.get_by_email(email)
        if existing is not None and existing.id != user_id:
            raise ConflictException("Email is already taken")

        user = self.user_repository.get_by_id(user_id, load_relationships=False)
        if user is None:
            raise NotFoundException("User not found")

        try:
            with self.transaction():
                self.user_repository.update_entity(user, name=name, email=email.lower())
        except DuplicateRecordException as exc:
            raise ConflictException("Email is already taken") from exc
        return user

    @BaseService.measure_operation("change_user_password")
    def change_password(self, actor_id: str, user_id: str, data: PasswordUpdateRequest) -> None:
        if actor_id != user_id:
            raise ForbiddenException("You can only update your own password")

        current: Optional[str] = data.current_password
        new: Optional[str] = data.new_password
        if not current or not new:
            raise ValidationException("Current password and new password are required")
        if len(new) < MIN_PASSWORD_LENGTH:
            raise ValidationException("New password must be at least 6 characters long")

        user = self.user_repository.get_by_id(user_id, load_relationships=False)
        if user is None:
            raise NotFoundException("User not found")
        if not verify_password(current, user.hashed_password):
            raise AuthenticationException("Current password is incorrect")

        with self.transaction():
            self.user_repository.update_entity(user, hashed_password=get_password_hash(new))
        self.logger.info(f"Password changed for user {user_id}")
