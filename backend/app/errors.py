# backend/app/errors.py
"""
Exception handlers that render every failure as the API error envelope:
``{"success": false, "error": "<message>", "details": [...]}``.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    400: "Bad request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not found",
    405: "Method not allowed",
    409: "Conflict",
    500: "Internal server error",
}


def _envelope(error: str, details: Optional[Any] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "error": error}
    if details:
        body["details"] = jsonable_encoder(details)
    return body


def _parse_detail(detail: Any, status_code: int) -> tuple[str, Optional[Any]]:
    if isinstance(detail, dict):
        message = detail.get("message") or detail.get("error") or detail.get("detail")
        details = detail.get("details")
        if isinstance(message, str) and message:
            return message, details
        return _STATUS_MESSAGES.get(status_code, "Error"), details
    if isinstance(detail, str) and detail:
        return detail, None
    return _STATUS_MESSAGES.get(status_code, "Error"), None


def _issue_list(errors: Sequence[Any]) -> List[Dict[str, Any]]:
    # Only loc/msg/type; raw inputs and ctx objects are not always serializable
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in errors
    ]


def _validation_message(errors: Sequence[Any]) -> str:
    if any(err.get("loc") and err["loc"][0] == "query" for err in errors):
        return "Invalid query parameters"
    return "Validation failed"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        message, details = _parse_detail(exc.detail, exc.status_code)
        return JSONResponse(_envelope(message, details), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message, details = _parse_detail(exc.detail, exc.status_code)
        return JSONResponse(_envelope(message, details), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        return JSONResponse(
            _envelope(_validation_message(errors), _issue_list(errors)),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            _envelope("Validation failed", _issue_list(exc.errors())),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            _envelope("Internal server error"),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
