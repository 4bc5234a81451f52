"""
Course and course category schemas.

Request models carry the full validation rules for courses: rate bounds,
schedule slot format and http(s) links.
"""

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from ..core.constants import HTTP_URL_PATTERN, TIME_OF_DAY_PATTERN
from .base import OptionalDateInput, RequestModel, StandardizedModel, UtcDatetime
from .review import ReviewWithReviewer
from .tutor import TutorOut
from .user import UserSummary

Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
Difficulty = Literal["beginner", "intermediate", "advanced"]

_URL_RE = re.compile(HTTP_URL_PATTERN)


def _clean_link(value: Any, error: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(error)
    value = value.strip()
    if not value:
        return None
    if not _URL_RE.match(value):
        raise ValueError(error)
    return value


class ScheduleSlot(RequestModel):
    days: List[Weekday]
    start_time: str = Field(..., pattern=TIME_OF_DAY_PATTERN)
    end_time: str = Field(..., pattern=TIME_OF_DAY_PATTERN)
    timezone: str = Field(..., min_length=1)


class CourseCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    short_description: str = Field(..., min_length=1, max_length=500)
    overview: str = Field(..., min_length=1)
    difficulty: Difficulty
    prerequisites: List[str] = Field(default_factory=list)
    skills_learned: List[str] = Field(..., min_length=1)
    total_hours: int = Field(..., ge=1)
    schedule: List[ScheduleSlot] = Field(..., min_length=1)
    zoom_link: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    trial_rate: float = Field(..., ge=0)
    full_course_rate: float = Field(..., ge=0)
    start_date: OptionalDateInput = None
    end_date: OptionalDateInput = None

    @field_validator("zoom_link", mode="before")
    @classmethod
    def validate_zoom_link(cls, value: Any) -> Optional[str]:
        return _clean_link(value, "Invalid Zoom link URL")

    @field_validator("image_url", mode="before")
    @classmethod
    def validate_image_url(cls, value: Any) -> Optional[str]:
        return _clean_link(value, "Invalid image URL")

    @field_validator("category_id", mode="before")
    @classmethod
    def blank_category_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_model_fields(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=False)
        data["schedule"] = [slot.model_dump(by_alias=True) for slot in self.schedule]
        return data


class CourseUpdate(RequestModel):
    """Partial update; empty strings and null links/dates mean "leave unchanged"."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    short_description: Optional[str] = Field(default=None, min_length=1, max_length=500)
    overview: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[Difficulty] = None
    prerequisites: Optional[List[str]] = None
    skills_learned: Optional[List[str]] = Field(default=None, min_length=1)
    total_hours: Optional[int] = Field(default=None, ge=1)
    schedule: Optional[List[ScheduleSlot]] = Field(default=None, min_length=1)
    zoom_link: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    trial_rate: Optional[float] = Field(default=None, ge=0)
    full_course_rate: Optional[float] = Field(default=None, ge=0)
    start_date: OptionalDateInput = None
    end_date: OptionalDateInput = None

    @model_validator(mode="before")
    @classmethod
    def drop_empty_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleared_when_null = {"zoomLink", "zoom_link", "imageUrl", "image_url", "startDate", "start_date", "endDate", "end_date"}
        return {
            key: value
            for key, value in data.items()
            if value != "" and not (value is None and key in cleared_when_null)
        }

    @field_validator("zoom_link", mode="before")
    @classmethod
    def validate_zoom_link(cls, value: Any) -> Optional[str]:
        return _clean_link(value, "Invalid Zoom link URL")

    @field_validator("image_url", mode="before")
    @classmethod
    def validate_image_url(cls, value: Any) -> Optional[str]:
        return _clean_link(value, "Invalid image URL")

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "CourseUpdate":
        required = (
            "title",
            "short_description",
            "overview",
            "difficulty",
            "prerequisites",
            "skills_learned",
            "total_hours",
            "schedule",
            "trial_rate",
            "full_course_rate",
        )
        for name in required:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_model_fields(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=False, exclude_unset=True)
        if self.schedule is not None and "schedule" in data:
            data["schedule"] = [slot.model_dump(by_alias=True) for slot in self.schedule]
        return data


class CategoryOut(StandardizedModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[UtcDatetime] = None


class CategoryCounts(StandardizedModel):
    courses: int = 0


class CategoryWithCount(CategoryOut):
    count: CategoryCounts = Field(default_factory=CategoryCounts, alias="_count")


class CourseCounts(StandardizedModel):
    enrollments: int = 0
    reviews: int = 0
    bookings: int = 0


class CourseOut(StandardizedModel):
    id: str
    tutor_id: str
    category_id: Optional[str] = None
    title: str
    short_description: str
    overview: str
    difficulty: str
    prerequisites: List[str] = Field(default_factory=list)
    skills_learned: List[str] = Field(default_factory=list)
    total_hours: int
    schedule: List[Dict[str, Any]] = Field(default_factory=list)
    zoom_link: Optional[str] = None
    image_url: Optional[str] = None
    trial_rate: float
    full_course_rate: float
    start_date: Optional[UtcDatetime] = None
    end_date: Optional[UtcDatetime] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None
    tutor: Optional[TutorOut] = None
    category: Optional[CategoryOut] = None


class CourseEnrollment(StandardizedModel):
    id: str
    student_id: str
    course_id: str
    enrolled_at: UtcDatetime
    hours_completed: float
    progress: float
    student: Optional[UserSummary] = None


class CourseListItem(CourseOut):
    enrollments: List[CourseEnrollment] = Field(default_factory=list)
    count: CourseCounts = Field(default_factory=CourseCounts, alias="_count")


class CourseDetail(CourseOut):
    reviews: List[ReviewWithReviewer] = Field(default_factory=list)
    count: CourseCounts = Field(default_factory=CourseCounts, alias="_count")


class Pagination(StandardizedModel):
    page: int
    limit: int
    total: int
    total_pages: int


class CourseListData(StandardizedModel):
    courses: List[CourseListItem]
    pagination: Pagination
