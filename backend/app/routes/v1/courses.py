# backend/app/routes/v1/courses.py
"""
Course routes - API v1

Endpoints:
    GET /                                → Filtered, paginated catalog
    POST /                               → Create a course (tutor)
    GET /{course_id}                     → Course detail with reviews
    PUT /{course_id}                     → Update own course (tutor)
    DELETE /{course_id}                  → Delete own course (tutor)

Course bodies are validated inside ``CourseService`` so that role and
ownership checks answer before validation does.
"""

import logging
from typing import Any, Dict, Literal, NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ...api.dependencies.auth import AuthContext, verify_auth
from ...api.dependencies.services import get_course_service
from ...core.constants import COURSE_LIMIT_DEFAULT, COURSE_LIMIT_MAX, COURSE_PAGE_DEFAULT
from ...core.exceptions import DomainException
from ...models.course import Course
from ...schemas.base_responses import ApiResponse, MessageResponse
from ...schemas.course import (
    CourseCounts,
    CourseDetail,
    CourseListData,
    CourseListItem,
    CourseOut,
    Pagination,
)
from ...schemas.review import ReviewWithReviewer
from ...services.course_service import CourseService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["courses-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def _course_out(course: Course) -> CourseOut:
    return CourseOut.model_validate(course)


@router.get("", response_model=ApiResponse[CourseListData])
def list_courses(
    page: int = Query(COURSE_PAGE_DEFAULT, ge=1),
    limit: int = Query(COURSE_LIMIT_DEFAULT, ge=1, le=COURSE_LIMIT_MAX),
    search: Optional[str] = Query(None),
    difficulty: Optional[Literal["beginner", "intermediate", "advanced"]] = Query(None),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    tutor_id: Optional[str] = Query(None, alias="tutorId"),
    user_id: Optional[str] = Query(None, alias="userId"),
    created_after: Optional[str] = Query(None, alias="createdAfter"),
    created_before: Optional[str] = Query(None, alias="createdBefore"),
    course_service: CourseService = Depends(get_course_service),
) -> ApiResponse[CourseListData]:
    """
    Browse the catalog, newest courses first.

    ``userId`` filters by the tutor profile of that user.
    """
    try:
        result = course_service.list_courses(
            page=page,
            limit=limit,
            search=search,
            difficulty=difficulty,
            category_id=category_id,
            tutor_id=tutor_id,
            user_id=user_id,
            created_after=created_after,
            created_before=created_before,
        )
    except DomainException as e:
        handle_domain_exception(e)

    items = []
    for course in result.courses:
        item = CourseListItem.model_validate(course)
        item.count = CourseCounts(**result.counts.get(course.id, {}))
        items.append(item)
    pagination = Pagination(
        page=result.page,
        limit=result.limit,
        total=result.total,
        total_pages=result.total_pages,
    )
    return ApiResponse(data=CourseListData(courses=items, pagination=pagination))


@router.post("", response_model=ApiResponse[CourseOut], status_code=status.HTTP_201_CREATED)
def create_course(
    payload: Dict[str, Any] = Body(...),
    auth: AuthContext = Depends(verify_auth),
    course_service: CourseService = Depends(get_course_service),
) -> ApiResponse[CourseOut]:
    try:
        course = course_service.create_course(auth.user_id, auth.role, payload)
        return ApiResponse(data=_course_out(course), message="Course created successfully")
    except DomainException as e:
        handle_domain_exception(e)


@router.get("/{course_id}", response_model=ApiResponse[CourseDetail])
def get_course(
    course_id: str,
    course_service: CourseService = Depends(get_course_service),
) -> ApiResponse[CourseDetail]:
    try:
        result = course_service.get_course(course_id)
    except DomainException as e:
        handle_domain_exception(e)

    detail = CourseDetail.model_validate(result.course)
    detail.reviews = [ReviewWithReviewer.model_validate(review) for review in result.reviews]
    detail.count = CourseCounts(**result.counts)
    return ApiResponse(data=detail)


@router.put("/{course_id}", response_model=ApiResponse[CourseOut])
def update_course(
    course_id: str,
    payload: Dict[str, Any] = Body(...),
    auth: AuthContext = Depends(verify_auth),
    course_service: CourseService = Depends(get_course_service),
) -> ApiResponse[CourseOut]:
    try:
        course = course_service.update_course(auth.user_id, auth.role, course_id, payload)
        return ApiResponse(data=_course_out(course), message="Course updated successfully")
    except DomainException as e:
        handle_domain_exception(e)


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: str,
    auth: AuthContext = Depends(verify_auth),
    course_service: CourseService = Depends(get_course_service),
) -> MessageResponse:
    try:
        course_service.delete_course(auth.user_id, auth.role, course_id)
        return MessageResponse(message="Course deleted successfully")
    except DomainException as e:
        handle_domain_exception(e)
