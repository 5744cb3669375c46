"""Task completion evaluator and task list projection.

Status is recomputed from the stored answer bags on every call. A task is
complete when walking `next()` from its first page reaches the end of the
task with every visited page answered and free of errors.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from intake.logic.pages.base import name_or_placeholder
from intake.logic.registry import SchemaRegistry, TaskDefinition
from intake.models.application import Application
from intake.models.task_list import (
    TASK_STATUS_LABELS,
    SectionView,
    TaskListView,
    TaskStatus,
    TaskView,
)

logger = logging.getLogger(__name__)


def _bag(task_data: Mapping[str, object], page_name: str) -> Optional[Mapping]:
    bag = task_data.get(page_name)
    if isinstance(bag, Mapping) and bag:
        return bag
    return None


def get_task_status(task: TaskDefinition, application: Application) -> str:
    """Return the status of `task` ignoring prerequisites."""
    if not application.data:
        return TaskStatus.NOT_STARTED
    task_data = application.task_data(task.slug)
    if _bag(task_data, task.first_page) is None:
        return TaskStatus.NOT_STARTED

    page_names = task.page_names()
    visited = set()
    current = task.first_page
    while current in page_names and current not in visited:
        visited.add(current)
        bag = _bag(task_data, current)
        if bag is None:
            return TaskStatus.IN_PROGRESS
        page = task.page_class(current)(bag, application)
        if page.errors():
            return TaskStatus.IN_PROGRESS
        current = page.next()
    return TaskStatus.COMPLETE


def get_task_statuses(application: Application, registry: SchemaRegistry) -> Dict[str, str]:
    """Return task slug -> status, evaluating prerequisites before dependants."""
    statuses: Dict[str, str] = {}

    def resolve(task: TaskDefinition) -> str:
        if task.slug in statuses:
            return statuses[task.slug]
        prerequisites = [resolve(registry.task(slug)) for slug in task.requires]
        if any(status != TaskStatus.COMPLETE for status in prerequisites):
            status = TaskStatus.CANNOT_START
        else:
            status = get_task_status(task, application)
        statuses[task.slug] = status
        return status

    for task in registry.tasks():
        resolve(task)
    logger.debug("task_status application_id=%s statuses=%s", application.id, statuses)
    return statuses


def task_list(application: Application, registry: SchemaRegistry) -> TaskListView:
    statuses = get_task_statuses(application, registry)
    sections = []
    for section in registry.sections:
        tasks = [
            TaskView(
                slug=task.slug,
                name=task.name,
                status=statuses[task.slug],
                status_label=TASK_STATUS_LABELS[statuses[task.slug]],
                first_page=task.first_page,
            )
            for task in section.tasks
        ]
        sections.append(SectionView(title=section.title, tasks=tasks))
    return TaskListView(
        application_id=application.id,
        person_name=name_or_placeholder(application.person),
        sections=sections,
        completed_tasks=sum(1 for s in statuses.values() if s == TaskStatus.COMPLETE),
        total_tasks=len(statuses),
    )


__all__ = ["get_task_status", "get_task_statuses", "task_list"]
