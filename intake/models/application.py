"""Pydantic models for application snapshots exchanged with the application store."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApplicationStatus:
    IN_PROGRESS = "inProgress"
    SUBMITTED = "submitted"


class Person(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    crn: str
    name: Optional[str] = None
    noms_number: Optional[str] = Field(default=None, alias="nomsNumber")
    prison_name: Optional[str] = Field(default=None, alias="prisonName")


class Application(BaseModel):
    """Snapshot of a remote application record.

    `data` maps task-name -> page-name -> answer-bag and is None for a
    freshly created application.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    person: Person
    data: Optional[Dict[str, Dict[str, Any]]] = None
    status: str = ApplicationStatus.IN_PROGRESS
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    submitted_at: Optional[str] = Field(default=None, alias="submittedAt")

    def task_data(self, task_name: str) -> Dict[str, Any]:
        return dict((self.data or {}).get(task_name) or {})

    def page_data(self, task_name: str, page_name: str) -> Any:
        return self.task_data(task_name).get(page_name)


class ApplicationSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    person: Person
    status: str
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    submitted_at: Optional[str] = Field(default=None, alias="submittedAt")


class NewApplication(BaseModel):
    crn: str = Field(min_length=1)


__all__ = [
    "ApplicationStatus",
    "Person",
    "Application",
    "ApplicationSummary",
    "NewApplication",
]
