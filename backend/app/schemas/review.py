"""
Review and review request schemas.
"""

from typing import List, Optional

from pydantic import Field

from .base import RequestModel, StandardizedModel, UtcDatetime
from .base_responses import ApiResponse
from .tutor import TutorOut
from .user import UserSummary


class CourseRef(StandardizedModel):
    id: str
    title: str


class ReviewOut(StandardizedModel):
    id: str
    booking_id: str
    reviewer_id: str
    tutor_id: str
    course_id: str
    rating: int
    comment: Optional[str] = None
    status: str
    approved_at: Optional[UtcDatetime] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class ReviewWithReviewer(ReviewOut):
    reviewer: Optional[UserSummary] = None


class ReviewWithRelations(ReviewWithReviewer):
    course: Optional[CourseRef] = None
    tutor: Optional[TutorOut] = None


class ReviewCreateRequest(RequestModel):
    booking_id: Optional[str] = None
    reviewer_id: Optional[str] = None
    tutor_id: Optional[str] = None
    course_id: Optional[str] = None
    rating: Optional[int] = None
    comment: Optional[str] = None


class ReviewStatusUpdateRequest(RequestModel):
    review_id: Optional[str] = None
    status: Optional[str] = None
    tutor_id: Optional[str] = None


class ReviewRequestOut(StandardizedModel):
    id: str
    tutor_id: str
    course_id: str
    student_id: str
    message: Optional[str] = None
    status: str
    sent_at: UtcDatetime
    responded_at: Optional[UtcDatetime] = None


class StudentRequestCourse(StandardizedModel):
    id: str
    title: str
    image_url: Optional[str] = None


class StudentRequestTutor(StandardizedModel):
    id: str
    user_id: str
    name: str
    email: str
    profile_image_url: Optional[str] = None


class StudentReviewRequest(ReviewRequestOut):
    course: Optional[StudentRequestCourse] = None
    tutor: Optional[StudentRequestTutor] = None
    has_existing_review: bool = False


class ReviewRequestStats(StandardizedModel):
    sent: int = 0
    pending_duplicates: int = 0
    reviewed_duplicates: int = 0
    failed: int = 0


class ReviewRequestCreate(RequestModel):
    tutor_id: Optional[str] = None
    course_id: Optional[str] = None
    student_ids: Optional[List[str]] = None
    message: Optional[str] = None
    force_resend: bool = False


class ReviewActionRequest(RequestModel):
    action: Optional[str] = None


class ReviewSubmitRequest(RequestModel):
    review_request_id: Optional[str] = None
    rating: Optional[int] = Field(default=None, description="Star rating between 1 and 5")
    comment: Optional[str] = None


class ReviewRequestSendResponse(ApiResponse[List[ReviewRequestOut]]):
    """Envelope for a batch send; ``stats`` breaks down the per-student outcome."""

    stats: ReviewRequestStats
