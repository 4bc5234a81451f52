"""
Stripe checkout schemas.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from .base import RequestModel


class CheckoutRequest(RequestModel):
    course_id: Optional[str] = None
    course_name: Optional[str] = None
    amount: Optional[float] = Field(default=None, description="Amount in major currency units (CAD)")
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    user_role: Optional[str] = None
    payment_type: Literal["session", "enrollment"] = "enrollment"
    session_date: Optional[str] = None
    session_type: Literal["individual", "group"] = "individual"


class CheckoutResponse(BaseModel):
    success: bool = True
    url: Optional[str] = None


class CheckoutSessionResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]
    metadata: Dict[str, Any] = Field(default_factory=dict)
