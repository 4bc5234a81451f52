# backend/app/services/course_service.py
"""
Course Service for the SkillBridge platform.

Handles course catalog search, course authoring by tutors and the
category list. Ownership is always checked against the tutor profile of
the authenticated user.
"""

from dataclasses import dataclass
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..core.exceptions import ConflictException, ForbiddenException, NotFoundException, ValidationException
from ..core.timezone_utils import ensure_utc, parse_iso_datetime
from ..models.course import Course, CourseCategory
from ..models.review import Review
from ..repositories.course_repository import CourseFilters
from ..repositories.factory import RepositoryFactory
from ..schemas.course import CourseCreate, CourseUpdate
from .base import BaseService
from .tutor_service import TutorService

logger = logging.getLogger(__name__)

# Matches no tutor profile; used when a userId filter resolves to nobody
NO_TUTOR_MATCH = "__none__"


@dataclass
class CoursePage:
    courses: List[Course]
    counts: Dict[str, Dict[str, int]]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass
class CourseDetailResult:
    course: Course
    reviews: List[Review]
    counts: Dict[str, int]


def _validation_details(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors(include_url=False)
    ]


class CourseService(BaseService):
    """Service layer for courses and course categories."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.course_repository = RepositoryFactory.create_course_repository(db)
        self.category_repository = RepositoryFactory.create_category_repository(db)
        self.tutor_repository = RepositoryFactory.create_tutor_repository(db)
        self.tutor_service = TutorService(db)

    # Categories

    @BaseService.measure_operation("list_categories")
    def list_categories(self) -> List[Tuple[CourseCategory, int]]:
        return self.category_repository.list_with_course_counts()

    # Catalog

    @BaseService.measure_operation("list_courses")
    def list_courses(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        difficulty: Optional[str] = None,
        category_id: Optional[str] = None,
        tutor_id: Optional[str] = None,
        user_id: Optional[str] = None,
        created_after: Optional[str] = None,
        created_before: Optional[str] = None,
    ) -> CoursePage:
        """
        One page of the catalog, newest first.

        ``user_id`` is resolved to that user's tutor profile and overrides
        ``tutor_id``; an unknown user yields an empty page.
        """
        filters = CourseFilters(
            search=search or None,
            difficulty=difficulty or None,
            category_id=category_id or None,
            tutor_id=tutor_id or None,
            created_after=self._parse_query_date("createdAfter", created_after),
            created_before=self._parse_query_date("createdBefore", created_before),
        )
        if user_id:
            tutor = self.tutor_repository.get_by_user_id(user_id)
            filters.tutor_id = tutor.id if tutor else NO_TUTOR_MATCH

        courses, total = self.course_repository.search(filters, skip=(page - 1) * limit, limit=limit)
        counts = self.course_repository.relation_counts([course.id for course in courses])
        return CoursePage(courses=courses, counts=counts, page=page, limit=limit, total=total)

    @staticmethod
    def _parse_query_date(name: str, value: Optional[str]):
        if not value:
            return None
        try:
            return parse_iso_datetime(value)
        except ValueError as exc:
            raise ValidationException(
                "Invalid query parameters",
                details=[{"loc": ["query", name], "msg": "Invalid date format", "type": "value_error"}],
            ) from exc

    @BaseService.measure_operation("get_course")
    def get_course(self, course_id: str) -> CourseDetailResult:
        course = self.course_repository.get_with_reviews(course_id)
        if course is None:
            raise NotFoundException("Course not found")
        reviews = sorted(course.reviews, key=lambda review: ensure_utc(review.created_at), reverse=True)
        counts = self.course_repository.relation_counts([course.id])[course.id]
        return CourseDetailResult(
            course=course,
            reviews=reviews,
            counts={"enrollments": counts["enrollments"], "reviews": counts["reviews"]},
        )

    # Authoring

    @BaseService.measure_operation("create_course")
    def create_course(self, actor_id: str, actor_role: str, payload: Dict[str, Any]) -> Course:
        """
        Publish a new course for the calling tutor.

        The tutor profile is created with directory defaults when the tutor
        has never set one up.
        """
        if actor_role != "tutor":
            raise ForbiddenException("Only tutors can create courses")

        data = self._parse(CourseCreate, payload)
        fields = data.to_model_fields()
        self._check_category(fields.get("category_id"))

        with self.transaction():
            tutor = self.tutor_service.ensure_profile(actor_id)
            course = self.course_repository.create(tutor_id=tutor.id, **fields)

        self.logger.info(f"Tutor {tutor.id} created course {course.id}")
        return self.course_repository.get_by_id(course.id)

    @BaseService.measure_operation("update_course")
    def update_course(self, actor_id: str, actor_role: str, course_id: str, payload: Dict[str, Any]) -> Course:
        if actor_role != "tutor":
            raise ForbiddenException("Only tutors can update courses")

        course = self._get_owned_course(actor_id, course_id, "You can only update your own courses")

        data = self._parse(CourseUpdate, payload)
        changes = data.to_model_fields()
        if "category_id" in changes:
            self._check_category(changes["category_id"])

        with self.transaction():
            self.course_repository.update_entity(course, **changes)

        return self.course_repository.get_by_id(course_id)

    @BaseService.measure_operation("delete_course")
    def delete_course(self, actor_id: str, actor_role: str, course_id: str) -> None:
        """
        Delete a course the caller owns.

        Raises:
            ConflictException: While anyone is enrolled or has a booking
        """
        if actor_role != "tutor":
            raise ForbiddenException("Only tutors can delete courses")

        course = self._get_owned_course(actor_id, course_id, "You can only delete your own courses")

        counts = self.course_repository.relation_counts([course.id])[course.id]
        if counts["enrollments"] > 0 or counts["bookings"] > 0:
            raise ConflictException("Cannot delete course with active enrollments or bookings")

        with self.transaction():
            self.course_repository.delete(course.id)
        self.logger.info(f"Deleted course {course_id}")

    def _get_owned_course(self, actor_id: str, course_id: str, forbidden_message: str) -> Course:
        course = self.course_repository.get_by_id(course_id)
        if course is None:
            raise NotFoundException("Course not found")
        tutor = self.tutor_repository.get_by_user_id(actor_id)
        if tutor is None or course.tutor_id != tutor.id:
            raise ForbiddenException(forbidden_message)
        return course

    def _check_category(self, category_id: Optional[str]) -> None:
        if category_id and self.category_repository.get_by_id(category_id, load_relationships=False) is None:
            raise NotFoundException("Course category not found")

    @staticmethod
    def _parse(model: Any, payload: Dict[str, Any]) -> Any:
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ValidationException("Validation failed", details=_validation_details(exc)) from exc
