# backend/app/routes/v1/course_categories.py
"""
Course category routes - API v1

Endpoints:
    GET /                                → All categories with course counts
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from ...api.dependencies.services import get_course_service
from ...schemas.base_responses import ApiResponse
from ...schemas.course import CategoryCounts, CategoryWithCount
from ...services.course_service import CourseService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["course-categories-v1"])


@router.get("", response_model=ApiResponse[List[CategoryWithCount]])
def list_categories(
    course_service: CourseService = Depends(get_course_service),
) -> ApiResponse[List[CategoryWithCount]]:
    """Categories ordered by name, each with the number of courses in it."""
    items = []
    for category, course_count in course_service.list_categories():
        item = CategoryWithCount.model_validate(category)
        item.count = CategoryCounts(courses=course_count)
        items.append(item)
    return ApiResponse(data=items)
