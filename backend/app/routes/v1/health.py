# backend/app/routes/v1/health.py
"""
Health check endpoint for monitoring and load balancer probes.
"""

import logging

from fastapi import APIRouter

from ...core.config import settings
from ...schemas.base_responses import ApiResponse
from ...schemas.health import HealthData

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=ApiResponse[HealthData])
def health_check() -> ApiResponse[HealthData]:
    return ApiResponse(data=HealthData(status="healthy", environment=settings.environment))
