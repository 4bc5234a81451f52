# backend/app/services/review_service.py
"""
Review Service for the SkillBridge platform.

Learners submit reviews against a booking; every review starts pending
and only shows up publicly once the tutor accepts it.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.constants import MAX_RATING, MIN_RATING
from ..core.exceptions import (
    ConflictException,
    DuplicateRecordException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from ..core.timezone_utils import utc_now
from ..models.review import Review, ReviewStatus
from ..repositories.factory import RepositoryFactory
from ..schemas.review import ReviewCreateRequest, ReviewStatusUpdateRequest
from .base import BaseService

logger = logging.getLogger(__name__)

MODERATION_STATUSES = (ReviewStatus.ACCEPTED.value, ReviewStatus.REJECTED.value)


def validate_rating(rating: Optional[int]) -> int:
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationException("Rating must be between 1 and 5")
    return rating


class ReviewService(BaseService):
    """Service layer for tutor reviews."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.review_repository = RepositoryFactory.create_review_repository(db)
        self.tutor_repository = RepositoryFactory.create_tutor_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.course_repository = RepositoryFactory.create_course_repository(db)

    @BaseService.measure_operation("list_reviews")
    def list_reviews(
        self,
        tutor_user_id: Optional[str] = None,
        course_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> List[Review]:
        """
        Reviews visible to the caller.

        A learner (``student_id``) sees everything they wrote and a tutor
        (``tutor_user_id``) everything written about them, whatever the
        status; without either only accepted reviews are returned.
        """
        if student_id:
            return self.review_repository.list_filtered(reviewer_id=student_id, course_id=course_id)
        if tutor_user_id:
            tutor = self.tutor_repository.get_by_user_id(tutor_user_id)
            if tutor is None:
                return []
            return self.review_repository.list_filtered(tutor_id=tutor.id, course_id=course_id)
        return self.review_repository.list_filtered(course_id=course_id, status=ReviewStatus.ACCEPTED.value)

    @BaseService.measure_operation("create_review")
    def create_review(self, data: ReviewCreateRequest) -> Review:
        if not data.booking_id or not data.reviewer_id or not data.tutor_id or not data.course_id or not data.rating:
            raise ValidationException("Missing required fields")
        rating = validate_rating(data.rating)

        tutor = self.tutor_repository.get_by_user_id(data.tutor_id)
        if tutor is None:
            raise NotFoundException("Tutor not found")
        if self.booking_repository.get_by_id(data.booking_id, load_relationships=False) is None:
            raise NotFoundException("Booking not found")
        if self.course_repository.get_by_id(data.course_id, load_relationships=False) is None:
            raise NotFoundException("Course not found")

        try:
            with self.transaction():
                review = self.review_repository.create(
                    booking_id=data.booking_id,
                    reviewer_id=data.reviewer_id,
                    tutor_id=tutor.id,
                    course_id=data.course_id,
                    rating=rating,
                    comment=data.comment or None,
                    status=ReviewStatus.PENDING.value,
                )
        except DuplicateRecordException as exc:
            raise ConflictException("A review has already been submitted for this booking") from exc

        self.logger.info(f"Review {review.id} submitted for tutor {tutor.id}")
        return review

    @BaseService.measure_operation("update_review_status")
    def update_status(self, data: ReviewStatusUpdateRequest) -> Review:
        """Accept or reject a review written about the calling tutor."""
        if not data.review_id or not data.status or not data.tutor_id:
            raise ValidationException("Review ID, status, and tutor ID are required")
        if data.status not in MODERATION_STATUSES:
            raise ValidationException("Status must be either 'accepted' or 'rejected'")

        review = self._get_owned_review(data.review_id, data.tutor_id, "You can only update your own reviews")

        approved_at = utc_now() if data.status == ReviewStatus.ACCEPTED.value else None
        with self.transaction():
            self.review_repository.update_entity(review, status=data.status, approved_at=approved_at)
        return self.review_repository.get_by_id(review.id)

    @BaseService.measure_operation("delete_review")
    def delete_review(self, review_id: Optional[str], tutor_user_id: Optional[str]) -> None:
        if not review_id or not tutor_user_id:
            raise ValidationException("Review ID and tutor ID are required")

        review = self._get_owned_review(review_id, tutor_user_id, "You can only delete your own reviews")
        with self.transaction():
            self.review_repository.delete(review.id)
        self.logger.info(f"Deleted review {review_id}")

    def _get_owned_review(self, review_id: str, tutor_user_id: str, forbidden_message: str) -> Review:
        review = self.review_repository.get_by_id(review_id)
        if review is None:
            raise NotFoundException("Review not found")
        if review.tutor.user_id != tutor_user_id:
            raise ForbiddenException(forbidden_message)
        return review
