# backend/app/repositories/user_repository.py
"""
User Repository for the SkillBridge platform.

Handles data access for ``User`` rows, always loading the tutor profile
because most callers need ``tutorId`` and ``bio``.
"""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, selectinload

from ..models.user import User
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Data access for ``User``."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def _apply_eager_loading(self, query: Query) -> Query:
        return query.options(selectinload(User.tutor))

    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email."""
        query = self._apply_eager_loading(self._build_query()).filter(
            func.lower(User.email) == email.strip().lower()
        )
        return query.first()
