# backend/app/schemas/__init__.py
"""
Pydantic schemas for the SkillBridge platform.

Request models accept camelCase (and snake_case) field names; response
models serialize with camelCase aliases.
"""

from .base_responses import ApiResponse, ErrorResponse, MessageResponse

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "MessageResponse",
]
