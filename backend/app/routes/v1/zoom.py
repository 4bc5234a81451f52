# backend/app/routes/v1/zoom.py
"""
Zoom routes - API v1

Endpoints:
    POST /                               → Create a Zoom meeting
"""

import logging
from typing import NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from ...api.dependencies.services import get_zoom_service
from ...core.exceptions import DomainException
from ...schemas.base_responses import ApiResponse
from ...schemas.zoom import ZoomMeeting, ZoomMeetingRequest
from ...services.zoom_service import ZoomService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["zoom-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("", response_model=ApiResponse[ZoomMeeting])
async def create_meeting(
    payload: Optional[ZoomMeetingRequest] = Body(None),
    zoom_service: ZoomService = Depends(get_zoom_service),
) -> ApiResponse[ZoomMeeting]:
    """Scheduled meeting when ``startTime`` is given, instant meeting otherwise."""
    try:
        meeting = await zoom_service.create_meeting(payload or ZoomMeetingRequest())
        return ApiResponse(data=ZoomMeeting.model_validate(meeting))
    except DomainException as e:
        handle_domain_exception(e)
