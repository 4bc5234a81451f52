# backend/app/repositories/factory.py
"""
Repository Factory for the SkillBridge platform.

Provides centralized creation of repository instances so services get
consistently initialized repositories sharing one session.
"""

from sqlalchemy.orm import Session

from .booking_repository import BookingRepository
from .category_repository import CategoryRepository
from .course_repository import CourseRepository
from .enrollment_repository import EnrollmentRepository
from .payment_repository import PaymentRepository
from .review_repository import ReviewRepository, ReviewRequestRepository
from .tutor_repository import TutorRepository
from .user_repository import UserRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_user_repository(db: Session) -> UserRepository:
        return UserRepository(db)

    @staticmethod
    def create_tutor_repository(db: Session) -> TutorRepository:
        return TutorRepository(db)

    @staticmethod
    def create_category_repository(db: Session) -> CategoryRepository:
        return CategoryRepository(db)

    @staticmethod
    def create_course_repository(db: Session) -> CourseRepository:
        return CourseRepository(db)

    @staticmethod
    def create_enrollment_repository(db: Session) -> EnrollmentRepository:
        return EnrollmentRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> BookingRepository:
        return BookingRepository(db)

    @staticmethod
    def create_payment_repository(db: Session) -> PaymentRepository:
        return PaymentRepository(db)

    @staticmethod
    def create_review_repository(db: Session) -> ReviewRepository:
        return ReviewRepository(db)

    @staticmethod
    def create_review_request_repository(db: Session) -> ReviewRequestRepository:
        return ReviewRequestRepository(db)
