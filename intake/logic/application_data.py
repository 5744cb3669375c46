"""Pure builders for the documents sent to the application store."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from intake.logic.answers import get_responses
from intake.logic.registry import SchemaRegistry
from intake.models.application import Application


def merge_page_answers(
    data: Optional[Mapping[str, Any]], task_name: str, page_name: str, body: Mapping[str, Any]
) -> Dict[str, Any]:
    """Return a copy of `data` with the (task, page) bag replaced by `body`.

    Other tasks and other pages of the same task are carried over untouched.
    """
    merged: Dict[str, Any] = dict(data or {})
    task_data = dict(merged.get(task_name) or {})
    task_data[page_name] = dict(body)
    merged[task_name] = task_data
    return merged


def merge_task_data(data: Optional[Mapping[str, Any]], task_data: Mapping[str, Mapping[str, Any]]) -> Dict[str, Any]:
    """Shallow-merge imported page bags into each task of `data`."""
    merged: Dict[str, Any] = dict(data or {})
    for task_name, bags in task_data.items():
        merged[task_name] = {**(merged.get(task_name) or {}), **bags}
    return merged


def update_payload(data: Mapping[str, Any], application_type: str) -> Dict[str, Any]:
    return {"data": dict(data), "type": application_type}


def submission_payload(application: Application, registry: SchemaRegistry, application_type: str) -> Dict[str, Any]:
    return {
        "applicationId": application.id,
        "translatedDocument": get_responses(application, registry),
        "type": application_type,
    }


__all__ = ["merge_page_answers", "merge_task_data", "update_payload", "submission_payload"]
