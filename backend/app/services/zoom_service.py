# backend/app/services/zoom_service.py
"""
Zoom meeting creation through a server-to-server OAuth app.

Each call fetches a fresh account-credentials token and then creates the
meeting for the app's own user (``users/me``).
"""

import logging
from typing import Any, Dict, Optional

import httpx
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.constants import ZOOM_MEETING_TYPE_INSTANT, ZOOM_MEETING_TYPE_SCHEDULED
from ..core.exceptions import ServiceException, UpstreamServiceException
from ..schemas.zoom import ZoomMeetingRequest
from .base import BaseService

logger = logging.getLogger(__name__)


class ZoomService(BaseService):
    """Creates Zoom meetings for course sessions."""

    def __init__(self, db: Session, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(db)
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=settings.zoom_request_timeout_seconds, transport=self._transport)

    async def _get_access_token(self, client: httpx.AsyncClient) -> str:
        response = await client.post(
            settings.zoom_oauth_url,
            params={"grant_type": "account_credentials", "account_id": settings.zoom_account_id},
            auth=(settings.zoom_client_id, settings.zoom_client_secret.get_secret_value()),
        )
        if response.status_code >= 400:
            self.logger.error(f"Zoom token request failed: {response.status_code} {response.text}")
            raise ServiceException(f"Zoom token error: {response.status_code} {response.text}")
        return str(response.json()["access_token"])

    async def create_meeting(self, data: ZoomMeetingRequest) -> Dict[str, Any]:
        """
        Create a meeting; scheduled when ``start_time`` is given, instant otherwise.

        Raises:
            ServiceException: Zoom is not configured or the token call failed
            UpstreamServiceException: Zoom rejected the meeting (carries Zoom's status)
        """
        if not settings.zoom_configured:
            raise ServiceException("Zoom is not configured")

        payload: Dict[str, Any] = {
            "topic": data.topic,
            "type": ZOOM_MEETING_TYPE_SCHEDULED if data.start_time else ZOOM_MEETING_TYPE_INSTANT,
            "duration": data.duration,
            "timezone": settings.zoom_timezone,
            "settings": {"join_before_host": True, "waiting_room": False},
        }
        if data.start_time:
            payload["start_time"] = data.start_time

        try:
            async with self._client() as client:
                token = await self._get_access_token(client)
                response = await client.post(
                    f"{settings.zoom_api_base_url}/users/me/meetings",
                    json=payload,
                    headers={"Authorization": f"Bearer {token}"},
                )
        except httpx.HTTPError as exc:
            self.logger.error(f"Zoom request failed: {exc}")
            raise ServiceException(f"Zoom request failed: {exc}") from exc

        if response.status_code >= 400:
            self.logger.warning(f"Zoom create failed: {response.status_code}")
            raise UpstreamServiceException(
                "Zoom create failed", status_code=response.status_code, details=[response.text]
            )

        meeting = response.json()
        self.logger.info(f"Created Zoom meeting {meeting.get('id')}")
        return {
            "id": meeting["id"],
            "topic": meeting.get("topic", data.topic),
            "join_url": meeting["join_url"],
            "start_url": meeting["start_url"],
        }
