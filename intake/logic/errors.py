"""Wizard error taxonomy.

Validation failures are page-local and expected; lookup failures mean the
registry has no such task/page; external failures carry the `{status, data}`
shape returned by upstream APIs so callers can tell a 404 from anything else.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping


class ValidationError(ValueError):
    """Raised by save when a page reports errors; nothing is persisted."""

    def __init__(self, errors: Mapping[str, str]):
        self.errors: Dict[str, str] = dict(errors)
        super().__init__(f"validation failed: {sorted(self.errors)}")


class TaskNotFoundError(LookupError):
    def __init__(self, task_name: str):
        self.task_name = task_name
        super().__init__(f"task not found: {task_name}")


class PageNotFoundError(LookupError):
    def __init__(self, task_name: str, page_name: str):
        self.task_name = task_name
        self.page_name = page_name
        super().__init__(f"page not found: {task_name}/{page_name}")


class ExternalServiceError(Exception):
    """Failure reported by an upstream API (application store, person service)."""

    def __init__(self, status: int, data: Any = None, *, source: str = ""):
        self.status = int(status)
        self.data = data if data is not None else {}
        self.source = source
        super().__init__(f"{source or 'upstream'} responded with status {self.status}")

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @property
    def is_permission_denied(self) -> bool:
        return self.status in (401, 403)


__all__ = [
    "ValidationError",
    "TaskNotFoundError",
    "PageNotFoundError",
    "ExternalServiceError",
]
