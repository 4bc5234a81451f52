# backend/app/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import (
    auth,
    bookings,
    checkout,
    course_categories,
    courses,
    enrollments,
    health,
    review_requests,
    reviews,
    tutors,
    users,
    zoom,
)

__all__ = [
    "auth",
    "bookings",
    "checkout",
    "course_categories",
    "courses",
    "enrollments",
    "health",
    "review_requests",
    "reviews",
    "tutors",
    "users",
    "zoom",
]
