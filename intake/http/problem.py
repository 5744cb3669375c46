"""Problem+JSON utilities and global exception handlers.

Defines the RFC 7807 media type and handler callables that produce
application/problem+json responses.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from intake.http.error_mapping import ERROR_MAP, external_error_key
from intake.logic.errors import ExternalServiceError, PageNotFoundError, TaskNotFoundError, ValidationError

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem_response(key: str, detail: str = "", **extra: Any) -> JSONResponse:
    mapping = ERROR_MAP[key]
    body: Dict[str, Any] = {
        "title": mapping["title"],
        "status": mapping["status"],
        "code": mapping["code"],
    }
    if detail:
        body["detail"] = detail
    body.update(extra)
    return JSONResponse(body, status_code=mapping["status"], media_type=PROBLEM_MEDIA_TYPE)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    status_code = int(exc.status_code or 500)
    if isinstance(exc.detail, dict):
        detail = exc.detail
    else:
        detail = {"title": "Error", "status": status_code, "detail": str(exc.detail or "")}
    return JSONResponse(
        detail,
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=dict(exc.headers) if exc.headers else None,
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "errors": [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ],
    }
    return JSONResponse(problem, status_code=422, media_type=PROBLEM_MEDIA_TYPE)


async def handle_task_not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    return problem_response("task_not_found", str(exc), task=exc.task_name)


async def handle_page_not_found(request: Request, exc: PageNotFoundError) -> JSONResponse:
    return problem_response("page_not_found", str(exc), task=exc.task_name, page=exc.page_name)


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return problem_response("validation_failed", "The page has errors", errors=exc.errors)


async def handle_external_service_error(request: Request, exc: ExternalServiceError) -> JSONResponse:
    key = external_error_key(exc)
    if key == "upstream_failure":
        logger.error("upstream_failure source=%s status=%s path=%s", exc.source, exc.status, request.url.path)
    return problem_response(key, str(exc), upstream_status=exc.status)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse({"title": "Internal Server Error", "status": 500}, status_code=500, media_type=PROBLEM_MEDIA_TYPE)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem_response",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_task_not_found",
    "handle_page_not_found",
    "handle_validation_error",
    "handle_external_service_error",
    "handle_unexpected_error",
]
