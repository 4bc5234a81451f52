"""
Tutor profile schemas.

``TutorOut`` mirrors the stored profile; ``TutorCard`` and ``TutorSkill``
are the computed shapes used by the public tutor directory.
"""

from typing import List, Optional

from pydantic import Field

from .base import RequestModel, StandardizedModel, UtcDatetime
from .user import UserSummary


class TutorOut(StandardizedModel):
    id: str
    user_id: str
    bio: Optional[str] = None
    hourly_rate: Optional[float] = None
    specialties: List[str] = Field(default_factory=list)
    availability: Optional[str] = None
    session_duration: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None
    user: Optional[UserSummary] = None


class TutorCard(StandardizedModel):
    id: str
    name: str
    email: str
    bio: Optional[str] = None
    avatar: str
    hourly_rate: float
    rating: float
    total_reviews: int
    students_count: int
    specialties: List[str]
    availability: str
    session_duration: str
    language: str
    timezone: str


class TutorDetail(TutorCard):
    response_time: str


class TutorSkill(StandardizedModel):
    id: str
    tutor_id: str
    title: str
    description: str
    category: str
    level: str
    price: float
    rating: float
    reviews: int
    image: str


class TutorDetailData(StandardizedModel):
    tutor: TutorDetail
    skills: List[TutorSkill]


class TutorProfile(StandardizedModel):
    """Signed-in tutor's own profile: user fields merged with the tutor row."""

    id: str
    user_id: str
    name: str
    email: str
    role: str
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = None
    specialties: List[str] = Field(default_factory=list)
    availability: Optional[str] = None
    session_duration: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class TutorProfileUpdate(RequestModel):
    name: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    specialties: Optional[List[str]] = None
    availability: Optional[str] = None
    session_duration: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
