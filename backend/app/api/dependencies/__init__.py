# backend/app/api/dependencies/__init__.py
"""
Central export point for all dependencies.

This module re-exports all dependencies from submodules
for convenient access throughout the application.
"""

from ...database import get_db
from .auth import AuthContext, get_current_user, verify_auth
from .services import (
    get_auth_service,
    get_booking_service,
    get_checkout_service,
    get_course_service,
    get_enrollment_service,
    get_review_request_service,
    get_review_service,
    get_tutor_service,
    get_user_service,
    get_zoom_service,
)

__all__ = [
    # Auth
    "AuthContext",
    "get_current_user",
    "verify_auth",
    # Database
    "get_db",
    # Services
    "get_auth_service",
    "get_booking_service",
    "get_checkout_service",
    "get_course_service",
    "get_enrollment_service",
    "get_review_request_service",
    "get_review_service",
    "get_tutor_service",
    "get_user_service",
    "get_zoom_service",
]
