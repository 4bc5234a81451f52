# backend/app/main.py
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME
from .init_db import init_db
from .routes.v1 import (
    auth as auth_v1,
    bookings as bookings_v1,
    checkout as checkout_v1,
    course_categories as course_categories_v1,
    courses as courses_v1,
    enrollments as enrollments_v1,
    health as health_v1,
    review_requests as review_requests_v1,
    reviews as reviews_v1,
    tutors as tutors_v1,
    users as users_v1,
    zoom as zoom_v1,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    if not settings.is_testing:
        init_db()
    if not settings.stripe_configured:
        logger.warning("STRIPE_SECRET_KEY is not set; checkout endpoints will fail")
    if not settings.zoom_configured:
        logger.warning("Zoom credentials are not set; meeting creation will fail")

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)

# Register unified error envelope handlers
from .errors import register_error_handlers  # noqa: E402

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)
logger.info("CORS allow_origins=%s", settings.cors_origin_list)

api_v1 = APIRouter(prefix="/api/v1")

api_v1.include_router(auth_v1.router, prefix="/auth")
api_v1.include_router(users_v1.router, prefix="/users")
api_v1.include_router(tutors_v1.router, prefix="/tutors")
api_v1.include_router(course_categories_v1.router, prefix="/course-categories")
api_v1.include_router(courses_v1.router, prefix="/courses")
api_v1.include_router(enrollments_v1.router, prefix="/enrollments")
api_v1.include_router(bookings_v1.router, prefix="/bookings")
api_v1.include_router(checkout_v1.router, prefix="/checkout")
api_v1.include_router(reviews_v1.router, prefix="/reviews")
api_v1.include_router(review_requests_v1.router, prefix="/review-requests")
api_v1.include_router(zoom_v1.router, prefix="/zoom")
api_v1.include_router(health_v1.router)

app.include_router(api_v1)
# Probes hit /health directly
app.include_router(health_v1.router)

__all__ = ["app"]
