"""Central error mapping for the HTTP boundary.

Single source of truth for mapping wizard and upstream failures to
problem+json codes and HTTP statuses. Handlers import from here instead of
hardcoding strings or numbers.
"""

from __future__ import annotations

from intake.logic.errors import ExternalServiceError

ERROR_MAP = {
    "task_not_found": {"code": "TASK_NOT_FOUND", "status": 404, "title": "Task not found"},
    "page_not_found": {"code": "PAGE_NOT_FOUND", "status": 404, "title": "Page not found"},
    "validation_failed": {"code": "PAGE_VALIDATION_FAILED", "status": 422, "title": "Invalid answers"},
    "upstream_not_found": {"code": "UPSTREAM_NOT_FOUND", "status": 404, "title": "Not found"},
    "upstream_forbidden": {"code": "UPSTREAM_PERMISSION_DENIED", "status": 403, "title": "Forbidden"},
    "upstream_failure": {"code": "UPSTREAM_FAILURE", "status": 502, "title": "Bad Gateway"},
}


def external_error_key(exc: ExternalServiceError) -> str:
    if exc.is_not_found:
        return "upstream_not_found"
    if exc.is_permission_denied:
        return "upstream_forbidden"
    return "upstream_failure"


__all__ = ["ERROR_MAP", "external_error_key"]
