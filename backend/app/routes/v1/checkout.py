# backend/app/routes/v1/checkout.py
"""
Stripe Checkout routes - API v1

Endpoints:
    POST /                               → Create a hosted checkout session
    GET /session                         → Read a checkout session back
"""

import logging
from typing import NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ...api.dependencies.services import get_checkout_service
from ...core.exceptions import DomainException
from ...schemas.checkout import CheckoutRequest, CheckoutResponse, CheckoutSessionResponse
from ...services.checkout_service import CheckoutService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("", response_model=CheckoutResponse)
def create_checkout(
    payload: CheckoutRequest = Body(...),
    checkout_service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutResponse:
    """Start checkout for a full course (``enrollment``) or a single ``session``."""
    try:
        return CheckoutResponse(url=checkout_service.create_checkout_session(payload))
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/session", response_model=CheckoutSessionResponse)
def get_checkout_session(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    checkout_service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutSessionResponse:
    try:
        session, metadata = checkout_service.retrieve_session(session_id or "")
        return CheckoutSessionResponse(data=session, metadata=metadata)
    except DomainException as e:
        handle_domain_exception(e)
