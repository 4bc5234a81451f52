# backend/app/services/review_request_service.py
"""
Review Request Service for the SkillBridge platform.

Tutors invite learners to review a course; learners answer an invitation
by submitting a review, which then waits for the tutor's moderation.

Request lifecycle:
    pending -> responded     when the learner submits a review
    responded -> pending     only when that review was deleted meanwhile

Duplicate requests are avoided by reading first; the unique index on
(tutor, course, student, status) is the fallback and its violations are
reported as duplicates rather than errors.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.constants import DEFAULT_REVIEW_REQUEST_MESSAGE, DEFAULT_SESSION_DURATION_MIN
from ..core.exceptions import (
    ConflictException,
    DuplicateRecordException,
    ForbiddenException,
    NotFoundException,
    RepositoryException,
    ServiceException,
    ValidationException,
)
from ..core.timezone_utils import ensure_utc, utc_now
from ..core.ulid_helper import is_valid_ulid
from ..models.booking import Booking, BookingStatus, SessionType
from ..models.review import Review, ReviewRequest, ReviewRequestStatus, ReviewStatus
from ..repositories.factory import RepositoryFactory
from ..schemas.review import ReviewActionRequest, ReviewRequestCreate, ReviewSubmitRequest
from ..utils.session_calculator import calculate_next_session_date
from .base import BaseService
from .review_service import validate_rating

logger = logging.getLogger(__name__)

ALREADY_REVIEWED = "You have already submitted a review for this course. Thank you for your feedback!"
NO_TUTOR_PROFILE = "No tutor profile found. Please create a tutor profile first."
REVIEW_ACTIONS = {"accept": ReviewStatus.ACCEPTED.value, "reject": ReviewStatus.REJECTED.value}


@dataclass
class SendOutcome:
    """Per-student results of one batch send."""

    sent: List[ReviewRequest] = field(default_factory=list)
    pending_duplicates: int = 0
    reviewed_duplicates: int = 0
    constraint_duplicates: int = 0
    failed: int = 0

    @property
    def duplicates(self) -> int:
        return self.pending_duplicates + self.reviewed_duplicates + self.constraint_duplicates

    @property
    def stats(self) -> Dict[str, int]:
        return {
            "sent": len(self.sent),
            "pending_duplicates": self.pending_duplicates,
            "reviewed_duplicates": self.reviewed_duplicates,
            "failed": self.failed,
        }

    @property
    def message(self) -> str:
        sent = len(self.sent)
        if sent and self.duplicates:
            parts = []
            if self.pending_duplicates:
                parts.append(f"{self.pending_duplicates} already pending")
            if self.reviewed_duplicates:
                parts.append(f"{self.reviewed_duplicates} already reviewed")
            return f"Sent {sent} new review request(s). {', '.join(parts)}."
        if sent:
            return f"Review requests sent to {sent} student(s)"
        if self.reviewed_duplicates and not self.pending_duplicates:
            return "All selected students have already submitted reviews for this course"
        if self.pending_duplicates and not self.reviewed_duplicates:
            return "All selected students already have pending review requests"
        return "Students either have pending requests or have already submitted reviews"


class ReviewRequestService(BaseService):
    """Service layer for review requests and review moderation by tutors."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.request_repository = RepositoryFactory.create_review_request_repository(db)
        self.review_repository = RepositoryFactory.create_review_repository(db)
        self.tutor_repository = RepositoryFactory.create_tutor_repository(db)
        self.course_repository = RepositoryFactory.create_course_repository(db)
        self.user_repository = RepositoryFactory.create_user_repository(db)
        self.booking_repository = RepositoryFactory.create_booking_repository(db)
        self.enrollment_repository = RepositoryFactory.create_enrollment_repository(db)

    # Tutor side

    @BaseService.measure_operation("list_review_requests")
    def list_for_tutor(self, tutor_id: Optional[str]) -> List[ReviewRequest]:
        if not tutor_id:
            raise ValidationException("Tutor ID is required")
        return self.request_repository.list_for_tutor(tutor_id)

    @BaseService.measure_operation("send_review_requests")
    def send_requests(self, data: ReviewRequestCreate) -> SendOutcome:
        """
        Invite each selected student to review a course.

        Students with a pending request are skipped unless ``force_resend``
        is set, which refreshes the message and send time instead. Students
        who already reviewed the course are skipped.

        Raises:
            ServiceException: When no student could be handled at all
        """
        if not data.tutor_id or not data.course_id or data.student_ids is None:
            raise ValidationException("Invalid request data. Required: tutorId, courseId, studentIds (array)")
        if not data.student_ids:
            raise ValidationException("Please select at least one student")

        tutor = self.tutor_repository.get_by_user_id(data.tutor_id)
        if tutor is None:
            raise NotFoundException(
                "Tutor profile not found. Please create a course first to set up your tutor profile."
            )

        if not is_valid_ulid(data.course_id):
            raise ValidationException("Invalid course ID format. Please select a valid course.")
        invalid_ids = [student_id for student_id in data.student_ids if not is_valid_ulid(student_id)]
        if invalid_ids:
            raise ValidationException(f"Invalid student IDs: {', '.join(invalid_ids)}")
        if self.course_repository.get_by_id(data.course_id, load_relationships=False) is None:
            raise NotFoundException("Course not found")

        message = data.message or DEFAULT_REVIEW_REQUEST_MESSAGE
        outcome = SendOutcome()
        with self.transaction():
            for student_id in data.student_ids:
                self._send_one(outcome, tutor.id, data.course_id, student_id, message, data.force_resend)

        self.logger.info(
            "Review request results: sent=%d pending=%d reviewed=%d failed=%d",
            len(outcome.sent),
            outcome.pending_duplicates,
            outcome.reviewed_duplicates,
            outcome.failed,
        )
        if not outcome.sent and not outcome.duplicates:
            raise ServiceException("Failed to send review requests", details=[{"reason": "All review requests failed"}])
        return outcome

    def _send_one(
        self,
        outcome: SendOutcome,
        tutor_id: str,
        course_id: str,
        student_id: str,
        message: str,
        force_resend: bool,
    ) -> None:
        try:
            if not self.user_repository.exists(id=student_id):
                self.logger.warning(f"Review request skipped: unknown student {student_id}")
                outcome.failed += 1
                return

            pending = self.request_repository.find_pending(tutor_id, course_id, student_id)
            if pending is not None:
                if force_resend:
                    with self.savepoint():
                        self.request_repository.update_entity(pending, message=message, sent_at=utc_now())
                    outcome.sent.append(pending)
                else:
                    outcome.pending_duplicates += 1
                return

            if self.review_repository.find_for(student_id, course_id, tutor_id) is not None:
                outcome.reviewed_duplicates += 1
                return

            with self.savepoint():
                request = self.request_repository.create(
                    tutor_id=tutor_id,
                    course_id=course_id,
                    student_id=student_id,
                    message=message,
                )
            outcome.sent.append(request)
        except DuplicateRecordException:
            self.logger.info(f"Review request already exists for student {student_id} (unique constraint)")
            outcome.constraint_duplicates += 1
        except (RepositoryException, SQLAlchemyError) as exc:
            self.logger.error(f"Review request for student {student_id} failed: {exc}")
            outcome.failed += 1

    @BaseService.measure_operation("list_pending_reviews")
    def pending_reviews_for_tutor(self, tutor_user_id: Optional[str]) -> Tuple[List[Review], Optional[str]]:
        """Reviews awaiting moderation; the message is set when the tutor has no profile yet."""
        if not tutor_user_id:
            raise ValidationException("Tutor ID is required")
        tutor = self.tutor_repository.get_by_user_id(tutor_user_id)
        if tutor is None:
            return [], NO_TUTOR_PROFILE
        return self.review_repository.list_pending_for_tutor(tutor.id), None

    @BaseService.measure_operation("moderate_review")
    def moderate_review(self, review_id: str, data: ReviewActionRequest) -> Tuple[Review, str]:
        """Accept or reject a pending review. Returns the review and the result message."""
        if data.action not in REVIEW_ACTIONS:
            raise ValidationException("Invalid action. Must be 'accept' or 'reject'")

        review = self.review_repository.get_by_id(review_id)
        if review is None:
            raise NotFoundException("Review not found")
        if review.status != ReviewStatus.PENDING.value:
            raise ValidationException("Review has already been processed")

        status = REVIEW_ACTIONS[data.action]
        with self.transaction():
            self.review_repository.update_entity(
                review,
                status=status,
                approved_at=utc_now() if status == ReviewStatus.ACCEPTED.value else None,
            )
        return review, f"Review {status} successfully"

    @BaseService.measure_operation("delete_review_request_by_id")
    def delete_request(self, request_id: str) -> None:
        with self.transaction():
            if not self.request_repository.delete(request_id):
                raise NotFoundException("Review request not found")

    # Student side

    @BaseService.measure_operation("delete_own_review_request")
    def delete_for_student(self, request_id: Optional[str], student_id: Optional[str]) -> None:
        if not request_id or not student_id:
            raise ValidationException("Request ID and Student ID are required")

        request = self.request_repository.get_by_id(request_id)
        if request is None:
            raise NotFoundException("Review request not found")
        if request.student_id != student_id:
            raise ForbiddenException("You can only delete your own review requests")
        if request.status != ReviewRequestStatus.PENDING.value:
            raise ValidationException("Cannot delete a review request that has already been responded to")

        with self.transaction():
            self.request_repository.delete(request_id)

    @BaseService.measure_operation("list_student_review_requests")
    def list_for_student(self, student_id: Optional[str]) -> List[Dict[str, Any]]:
        """Open invitations for a learner, skipping courses they already reviewed."""
        if not student_id:
            raise ValidationException("Student ID is required")

        results: List[Dict[str, Any]] = []
        for request in self.request_repository.list_pending_for_student(student_id):
            if self.review_repository.find_for(request.student_id, request.course_id, request.tutor_id):
                continue
            tutor = request.tutor
            results.append(
                {
                    "id": request.id,
                    "tutor_id": request.tutor_id,
                    "course_id": request.course_id,
                    "student_id": request.student_id,
                    "message": request.message,
                    "status": request.status,
                    "sent_at": request.sent_at,
                    "responded_at": request.responded_at,
                    "course": request.course,
                    "tutor": {
                        "id": tutor.id,
                        "user_id": tutor.user_id,
                        "name": tutor.user.name,
                        "email": tutor.user.email,
                        "profile_image_url": tutor.user.profile_image_url,
                    }
                    if tutor
                    else None,
                    "has_existing_review": False,
                }
            )
        return results

    @BaseService.measure_operation("submit_requested_review")
    def submit_review(self, data: ReviewSubmitRequest) -> Review:
        """
        Answer a review request with a review.

        The learner must have an enrollment or a booking for the course. An
        enrolled learner without a booking gets a completed booking created
        for the review to hang off.
        """
        if not data.review_request_id:
            raise ValidationException("Review request ID is required", details=["reviewRequestId field is missing"])
        if not data.rating:
            raise ValidationException("Rating is required", details=["rating field is missing or zero"])
        rating = validate_rating(data.rating)

        request = self.request_repository.get_by_id(data.review_request_id)
        if request is None:
            raise NotFoundException(
                "Review request not found",
                details=[f"No review request found with ID: {data.review_request_id}"],
            )

        existing = self.review_repository.find_for(request.student_id, request.course_id, request.tutor_id)
        if request.status != ReviewRequestStatus.PENDING.value:
            if existing is not None:
                raise ValidationException(
                    "This review request has already been responded to",
                    details=[f"Current status: {request.status}"],
                )
            self._reopen(request)

        booking = self.booking_repository.get_latest_for(request.student_id, request.tutor_id, request.course_id)
        if booking is not None:
            self._check_review_window(request, booking)

        enrollment = self.enrollment_repository.get_for_student_course(request.student_id, request.course_id)
        if enrollment is None and booking is None:
            raise ForbiddenException(
                "You must be enrolled in this course or have booked a session to leave a review."
            )

        try:
            with self.transaction():
                if booking is None:
                    booking = self.booking_repository.create(
                        learner_id=request.student_id,
                        tutor_id=request.tutor_id,
                        course_id=request.course_id,
                        session_date=utc_now(),
                        duration_min=DEFAULT_SESSION_DURATION_MIN,
                        status=BookingStatus.COMPLETED.value,
                        session_type=SessionType.INDIVIDUAL.value,
                    )
                review = self.review_repository.create(
                    booking_id=booking.id,
                    reviewer_id=request.student_id,
                    tutor_id=request.tutor_id,
                    course_id=request.course_id,
                    rating=rating,
                    comment=data.comment or None,
                    status=ReviewStatus.PENDING.value,
                )
                self._mark_responded(request)
        except DuplicateRecordException as exc:
            # The booking already carries a review; close the request anyway
            self.logger.info(f"Review request {request.id} answered for an already reviewed booking")
            with self.transaction():
                self._mark_responded(request)
            raise ValidationException(ALREADY_REVIEWED) from exc

        self.logger.info(f"Review {review.id} submitted for review request {request.id}")
        return review

    def _reopen(self, request: ReviewRequest) -> None:
        try:
            with self.transaction():
                self.request_repository.update_entity(
                    request, status=ReviewRequestStatus.PENDING.value, responded_at=None
                )
        except DuplicateRecordException as exc:
            raise ConflictException("A pending review request already exists for this course") from exc

    def _mark_responded(self, request: ReviewRequest) -> None:
        self.request_repository.delete_other_responded(request)
        self.request_repository.update_entity(
            request, status=ReviewRequestStatus.RESPONDED.value, responded_at=utc_now()
        )

    def _check_review_window(self, request: ReviewRequest, booking: Booking) -> None:
        now = utc_now()
        course = self.course_repository.get_by_id(request.course_id, load_relationships=False)
        start_date = ensure_utc(course.start_date) if course else None
        if start_date is not None:
            if start_date > now:
                raise ForbiddenException(
                    "You cannot submit a review before the course starts. The course begins on "
                    f"{start_date.month}/{start_date.day}/{start_date.year}."
                )
        else:
            next_session = calculate_next_session_date(course.schedule if course else None, now)
            self.logger.debug(f"Course {request.course_id} has no start date; next scheduled session {next_session}")
            if ensure_utc(booking.created_at) > now:
                raise ForbiddenException("You cannot submit a review before your booking date.")
