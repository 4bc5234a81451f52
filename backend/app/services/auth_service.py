# backend/app/services/auth_service.py
"""
Authentication Service for the SkillBridge platform.

Handles account registration and credential checks. Tokens are issued by
``app.auth``; this service only decides who gets one.
"""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from ..auth import create_access_token, get_password_hash, verify_password
from ..core.exceptions import AuthenticationException, ConflictException, DuplicateRecordException
from ..models.user import User, UserRole
from ..repositories.factory import RepositoryFactory
from ..schemas.user import RegisterRequest
from .base import BaseService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
EMAIL_EXISTS = "User with this email already exists"


class AuthService(BaseService):
    """Service layer for registration and login."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.tutor_repository = RepositoryFactory.create_tutor_repository(db)

    @BaseService.measure_operation("register_user")
    def register_user(self, data: RegisterRequest) -> User:
        """
        Create a new account.

        Tutors who register with a bio get their tutor profile right away;
        everyone else gets one lazily the first time it is needed.

        Raises:
            ConflictException: If the email is already registered
        """
        email = data.email.lower()
        if self.user_repository.get_by_email(email):
            raise ConflictException(EMAIL_EXISTS)

        try:
            with self.transaction():
                user = self.user_repository.create(
                    name=data.name,
                    email=email,
                    hashed_password=get_password_hash(data.password),
                    role=data.role,
                    profile_image_url=data.profile_image_url,
                )
                if data.role == UserRole.TUTOR.value and data.bio:
                    self.tutor_repository.create_for_user(user.id, bio=data.bio)
        except DuplicateRecordException as exc:
            raise ConflictException(EMAIL_EXISTS) from exc

        self.logger.info(f"Registered {user.role} account {user.id}")
        self.db.refresh(user)
        return user

    @BaseService.measure_operation("authenticate_user")
    def authenticate(self, email: str, password: str) -> Tuple[User, str]:
        """
        Check credentials and issue an access token.

        Unknown emails and wrong passwords fail the same way.
        """
        user = self.user_repository.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            self.logger.info("Failed login attempt")
            raise AuthenticationException(INVALID_CREDENTIALS)

        token = create_access_token({"userId": user.id, "email": user.email, "role": user.role})
        return user, token
