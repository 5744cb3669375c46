"""Task status constants and the read-only task list projection."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class TaskStatus:
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    CANNOT_START = "cannot_start"


TASK_STATUS_LABELS = {
    TaskStatus.NOT_STARTED: "Not started",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETE: "Completed",
    TaskStatus.CANNOT_START: "Cannot start yet",
}


class TaskView(BaseModel):
    slug: str
    name: str
    status: str
    status_label: str
    first_page: str


class SectionView(BaseModel):
    title: str
    tasks: List[TaskView]


class TaskListView(BaseModel):
    application_id: str
    person_name: str
    sections: List[SectionView]
    completed_tasks: int
    total_tasks: int


__all__ = [
    "TaskStatus",
    "TASK_STATUS_LABELS",
    "TaskView",
    "SectionView",
    "TaskListView",
]
