"""
Base response schemas for standardized API responses.

Every endpoint answers with the same envelope:
``{"success": true, "data": ..., "message": "..."}``. Errors use
``{"success": false, "error": "...", "details": [...]}`` and are produced
by ``app.errors``.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    success: bool = Field(default=True, description="Operation success status")
    data: Optional[T] = Field(default=None, description="Response payload")
    message: Optional[str] = Field(default=None, description="Human-readable message")

    @model_serializer(mode="wrap")
    def _omit_empty_message(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        payload = handler(self)
        if payload.get("message") is None:
            payload.pop("message", None)
        return payload


class MessageResponse(BaseModel):
    """Envelope for operations that only report a message (deletes, password changes)."""

    success: bool = Field(default=True, description="Operation success status")
    message: str = Field(description="Human-readable message")


class ErrorResponse(BaseModel):
    """Documented shape of every error response."""

    success: bool = False
    error: str
    details: Optional[Any] = None
