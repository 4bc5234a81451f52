"""
Zoom meeting schemas.
"""

from typing import Optional

from pydantic import ConfigDict, Field

from ..core.constants import ZOOM_DEFAULT_DURATION_MIN, ZOOM_DEFAULT_TOPIC
from .base import StandardizedModel


class ZoomMeetingRequest(StandardizedModel):
    # Zoom's own snake_case names are accepted alongside camelCase
    model_config = ConfigDict(extra="ignore")

    topic: str = ZOOM_DEFAULT_TOPIC
    start_time: Optional[str] = Field(default=None, description="ISO start time, e.g. 2025-11-02T21:00:00Z")
    duration: int = Field(default=ZOOM_DEFAULT_DURATION_MIN, gt=0)


class ZoomMeeting(StandardizedModel):
    id: int
    topic: str
    join_url: str
    start_url: str
