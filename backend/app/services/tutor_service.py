# backend/app/services/tutor_service.py
"""
Tutor Service for the SkillBridge platform.

Builds the public tutor directory (cards with computed rating, student
count and specialties) and manages a tutor's own profile row.
"""

from decimal import ROUND_HALF_UP, Decimal
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from ..core.constants import (
    DEFAULT_TUTOR_AVAILABILITY,
    DEFAULT_TUTOR_HOURLY_RATE,
    DEFAULT_TUTOR_LANGUAGE,
    DEFAULT_TUTOR_RESPONSE_TIME,
    DEFAULT_TUTOR_SESSION_DURATION,
    DEFAULT_TUTOR_TIMEZONE,
    MAX_LISTED_SPECIALTIES,
    PLACEHOLDER_IMAGE,
    UNCATEGORIZED_LABEL,
)
from ..core.exceptions import ForbiddenException, NotFoundException
from ..models.booking import BookingStatus
from ..models.review import ReviewStatus
from ..models.tutor import Tutor
from ..models.user import User
from ..schemas.tutor import TutorProfileUpdate
from ..repositories.factory import RepositoryFactory
from .base import BaseService

logger = logging.getLogger(__name__)

# Profile created on first visit to the profile page
EMPTY_PROFILE: Dict[str, Any] = {
    "bio": "",
    "hourly_rate": 0.0,
    "specialties": [],
    "availability": "",
    "session_duration": "",
    "language": "",
    "timezone": "",
}

# Profile created implicitly when a tutor publishes a first course
DEFAULT_PROFILE: Dict[str, Any] = {
    "bio": "",
    "hourly_rate": DEFAULT_TUTOR_HOURLY_RATE,
    "specialties": [],
    "availability": DEFAULT_TUTOR_AVAILABILITY,
    "session_duration": DEFAULT_TUTOR_SESSION_DURATION,
    "language": DEFAULT_TUTOR_LANGUAGE,
    "timezone": DEFAULT_TUTOR_TIMEZONE,
}

PROFILE_TEXT_FIELDS = ("bio", "availability", "session_duration", "language", "timezone")


def round_rating(value: float) -> float:
    """Round half-up to one decimal place (4.25 -> 4.3)."""
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def average_rating(ratings: Sequence[int]) -> float:
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


class TutorService(BaseService):
    """Service layer for tutor directory and tutor profiles."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.tutor_repository = RepositoryFactory.create_tutor_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)

    # Directory

    @BaseService.measure_operation("list_tutors")
    def list_tutors(self) -> List[Dict[str, Any]]:
        tutors = self.tutor_repository.list_with_details()
        return [self._format_tutor(tutor, specialty_limit=MAX_LISTED_SPECIALTIES) for tutor in tutors]

    @BaseService.measure_operation("get_tutor_detail")
    def get_tutor_detail(self, tutor_id: str) -> Dict[str, Any]:
        """
        Full tutor page: profile card plus one skill entry per course.

        Raises:
            NotFoundException: If no tutor profile has this id
        """
        tutor = self.tutor_repository.get_by_id(tutor_id)
        if tutor is None:
            raise NotFoundException("Tutor not found")

        card = self._format_tutor(tutor)
        card["response_time"] = DEFAULT_TUTOR_RESPONSE_TIME

        rating = card["rating"]
        skills = [
            {
                "id": course.id,
                "tutor_id": tutor.id,
                "title": course.title,
                "description": course.short_description,
                "category": course.category.name if course.category else UNCATEGORIZED_LABEL,
                "level": course.difficulty,
                "price": course.full_course_rate,
                "rating": rating,
                "reviews": card["total_reviews"],
                "image": course.image_url or PLACEHOLDER_IMAGE,
            }
            for course in tutor.courses
        ]
        return {"tutor": card, "skills": skills}

    def _format_tutor(self, tutor: Tutor, specialty_limit: Optional[int] = None) -> Dict[str, Any]:
        accepted = [r.rating for r in tutor.reviews_received if r.status == ReviewStatus.ACCEPTED.value]
        students = {b.learner_id for b in tutor.bookings if b.status == BookingStatus.COMPLETED.value}

        specialties = list(tutor.specialties or [])
        if not specialties:
            specialties = [
                course.category.name if course.category else course.title
                for course in tutor.courses
                if (course.category and course.category.name) or course.title
            ]
        if specialty_limit is not None:
            specialties = specialties[:specialty_limit]

        return {
            "id": tutor.id,
            "name": tutor.user.name,
            "email": tutor.user.email,
            "bio": tutor.bio,
            "avatar": tutor.user.profile_image_url or PLACEHOLDER_IMAGE,
            "hourly_rate": tutor.hourly_rate or DEFAULT_TUTOR_HOURLY_RATE,
            "rating": round_rating(average_rating(accepted)),
            "total_reviews": len(accepted),
            "students_count": len(students),
            "specialties": specialties,
            "availability": tutor.availability or DEFAULT_TUTOR_AVAILABILITY,
            "session_duration": tutor.session_duration or DEFAULT_TUTOR_SESSION_DURATION,
            "language": tutor.language or DEFAULT_TUTOR_LANGUAGE,
            "timezone": tutor.timezone or DEFAULT_TUTOR_TIMEZONE,
        }

    # Own profile

    @staticmethod
    def _require_tutor(user: User) -> None:
        if not user.is_tutor:
            raise ForbiddenException("User is not a tutor")

    @BaseService.measure_operation("get_tutor_profile")
    def get_profile(self, user: User) -> Tuple[User, Tutor]:
        """Return the caller's profile, creating an empty one on first access."""
        self._require_tutor(user)
        tutor = self.tutor_repository.get_by_user_id(user.id)
        if tutor is None:
            with self.transaction():
                tutor = self.tutor_repository.create_for_user(user.id, **EMPTY_PROFILE)
            self.logger.info(f"Created empty tutor profile for user {user.id}")
        return user, tutor

    @BaseService.measure_operation("update_tutor_profile")
    def update_profile(self, user: User, data: TutorProfileUpdate) -> Tuple[User, Tutor, bool]:
        """
        Apply a partial profile update.

        Blank text values are ignored. Returns ``(user, tutor, created)`` where
        ``created`` tells whether the profile row did not exist before.
        """
        self._require_tutor(user)
        provided = data.model_fields_set

        user_changes: Dict[str, Any] = {}
        if data.name:
            user_changes["name"] = data.name
        if "profile_image_url" in provided:
            user_changes["profile_image_url"] = data.profile_image_url

        tutor = self.tutor_repository.get_by_user_id(user.id)
        created = tutor is None

        with self.transaction():
            if created:
                fields = dict(EMPTY_PROFILE)
                fields.update({key: getattr(data, key) for key in PROFILE_TEXT_FIELDS if getattr(data, key)})
                if data.hourly_rate is not None:
                    fields["hourly_rate"] = data.hourly_rate
                if data.specialties:
                    fields["specialties"] = data.specialties
                tutor = self.tutor_repository.create_for_user(user.id, **fields)
            else:
                tutor_changes: Dict[str, Any] = {
                    key: getattr(data, key) for key in PROFILE_TEXT_FIELDS if getattr(data, key)
                }
                if data.hourly_rate is not None:
                    tutor_changes["hourly_rate"] = data.hourly_rate
                if data.specialties:
                    tutor_changes["specialties"] = data.specialties
                self.tutor_repository.update_entity(tutor, **tutor_changes)

            if user_changes:
                self.user_repository.update_entity(user, **user_changes)

        return user, tutor, created

    @staticmethod
    def merge_profile(user: User, tutor: Tutor) -> Dict[str, Any]:
        """User fields overlaid with the tutor row; ``id`` is the tutor id."""
        return {
            "id": tutor.id,
            "user_id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role,
            "profile_image_url": user.profile_image_url,
            "bio": tutor.bio,
            "hourly_rate": tutor.hourly_rate,
            "specialties": tutor.specialties or [],
            "availability": tutor.availability,
            "session_duration": tutor.session_duration,
            "language": tutor.language,
            "timezone": tutor.timezone,
            "created_at": tutor.created_at,
            "updated_at": tutor.updated_at,
        }

    def ensure_profile(self, user_id: str) -> Tutor:
        """
        Tutor row for ``user_id``, created with directory defaults when missing.

        Does not commit; callers run it inside their own transaction.
        """
        tutor = self.tutor_repository.get_by_user_id(user_id)
        if tutor is None:
            tutor = self.tutor_repository.create_for_user(user_id, **DEFAULT_PROFILE)
            self.logger.info(f"Created default tutor profile for user {user_id}")
        return tutor
