"""
Database models for the SkillBridge platform.

Importing this package registers every table on ``Base.metadata``.
"""

from .booking import Booking, BookingStatus, SessionType
from .course import Course, CourseCategory, CourseDifficulty
from .enrollment import Enrollment
from .payment import Payment, PaymentMethod, PaymentStatus
from .review import Review, ReviewRequest, ReviewRequestStatus, ReviewStatus
from .tutor import Tutor
from .user import User, UserRole

__all__ = [
    "Booking",
    "BookingStatus",
    "Course",
    "CourseCategory",
    "CourseDifficulty",
    "Enrollment",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Review",
    "ReviewRequest",
    "ReviewRequestStatus",
    "ReviewStatus",
    "SessionType",
    "Tutor",
    "User",
    "UserRole",
]
