"""
Enrollment schemas.
"""

from typing import List, Optional

from .base import RequestModel, StandardizedModel, UtcDatetime
from .tutor import TutorOut
from .user import UserSummary


class EnrollmentCourse(StandardizedModel):
    id: str
    title: str
    total_hours: int
    image_url: Optional[str] = None
    tutor: Optional[TutorOut] = None


class EnrollmentOut(StandardizedModel):
    id: str
    student_id: str
    course_id: str
    enrolled_at: UtcDatetime
    hours_completed: float
    progress: float
    completed_at: Optional[UtcDatetime] = None
    student: Optional[UserSummary] = None
    course: Optional[EnrollmentCourse] = None


class EnrollmentCreateRequest(RequestModel):
    user_id: Optional[str] = None
    course_id: Optional[str] = None
    session_id: Optional[str] = None


class EnrollmentCheckStudent(UserSummary):
    role: Optional[str] = None


class EnrollmentCheckEntry(StandardizedModel):
    id: str
    student_id: str
    course_id: str
    enrolled_at: UtcDatetime
    hours_completed: float
    progress: float
    student: Optional[EnrollmentCheckStudent] = None


class EnrollmentCheckCourse(StandardizedModel):
    id: str
    title: str
    tutor_id: str
    tutor: Optional[UserSummary] = None


class EnrollmentCheckData(StandardizedModel):
    course: EnrollmentCheckCourse
    enrollments_count: int
    enrollments: List[EnrollmentCheckEntry]
    user_enrollment: Optional[EnrollmentCheckEntry] = None
