# backend/app/repositories/__init__.py
"""
Repository Pattern Implementation for the SkillBridge platform.

This package provides the repository layer for data access,
separating business logic from database queries.

Usage:
    from app.repositories import RepositoryFactory

    # In a service:
    self.course_repository = RepositoryFactory.create_course_repository(db)
    courses, total = self.course_repository.search(filters, skip=0, limit=10)
"""

from .base_repository import BaseRepository, IRepository
from .booking_repository import BookingRepository
from .category_repository import CategoryRepository
from .course_repository import CourseFilters, CourseRepository
from .enrollment_repository import EnrollmentRepository
from .factory import RepositoryFactory
from .payment_repository import PaymentRepository
from .review_repository import ReviewRepository, ReviewRequestRepository
from .tutor_repository import TutorRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "CategoryRepository",
    "CourseFilters",
    "CourseRepository",
    "EnrollmentRepository",
    "IRepository",
    "PaymentRepository",
    "RepositoryFactory",
    "ReviewRepository",
    "ReviewRequestRepository",
    "TutorRepository",
    "UserRepository",
]
