"""Wizard orchestration: load, resolve, save and submit applications.

Every operation reads the full application document from the store, works
on a copy and writes the full document back. There is no concurrency guard;
the last write wins.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Type

from intake.clients.application_store import ApplicationStore
from intake.logic.application_data import (
    merge_page_answers,
    merge_task_data,
    submission_payload,
    update_payload,
)
from intake.logic.errors import ValidationError
from intake.logic.events import (
    APPLICATION_DATA_SAVED,
    APPLICATION_SUBMITTED,
    OASYS_DATA_IMPORTED,
    PAGE_SAVED,
    publish,
)
from intake.logic.pages.base import BasePage
from intake.logic.registry import SchemaRegistry
from intake.models.application import Application, ApplicationStatus, ApplicationSummary

logger = logging.getLogger(__name__)

PREVIOUS_PAGE_KEY = "previous_page"

StoreFactory = Callable[[str], ApplicationStore]


def page_body(
    application: Application,
    task_name: str,
    page_name: str,
    body: Optional[Mapping[str, Any]] = None,
    user_input: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Pick the body a page is built from.

    A non-empty request body wins, then redisplayed user input from a failed
    save, then the stored answer bag (only when it is a mapping).
    """
    if body:
        return dict(body)
    if user_input:
        return dict(user_input)
    stored = application.page_data(task_name, page_name)
    if isinstance(stored, Mapping):
        return dict(stored)
    return {}


class WizardService:
    def __init__(
        self,
        registry: SchemaRegistry,
        store_factory: StoreFactory,
        data_services: Any,
        session: Optional[MutableMapping[str, Any]] = None,
        application_type: str = "CAS2",
    ):
        self.registry = registry
        self.store_factory = store_factory
        self.data_services = data_services
        self.session = session
        self.application_type = application_type

    async def find_application(self, token: str, application_id: str) -> Application:
        return await self.store_factory(token).get(application_id)

    async def create_application(self, token: str, crn: str) -> Application:
        application = await self.store_factory(token).create(crn)
        logger.info("application_created application_id=%s", application.id)
        return application

    async def get_all_for_user(self, token: str) -> Dict[str, List[ApplicationSummary]]:
        grouped: Dict[str, List[ApplicationSummary]] = {
            ApplicationStatus.IN_PROGRESS: [],
            ApplicationStatus.SUBMITTED: [],
        }
        for summary in await self.store_factory(token).all():
            key = ApplicationStatus.SUBMITTED if summary.status == ApplicationStatus.SUBMITTED else ApplicationStatus.IN_PROGRESS
            grouped[key].append(summary)
        return grouped

    async def initialize_page(
        self,
        page_cls: Type[BasePage],
        application: Application,
        task_name: str,
        page_name: str,
        token: str,
        body: Optional[Mapping[str, Any]] = None,
        user_input: Optional[Mapping[str, Any]] = None,
        previous_page: str = "",
    ) -> BasePage:
        """Build the page for a request.

        Pages with an `initialize` hook decide for themselves which page to
        return; that page is used as-is.
        """
        resolved_body = page_body(application, task_name, page_name, body, user_input)
        initialize = getattr(page_cls, "initialize", None)
        if initialize is not None:
            page = await initialize(resolved_body, application, token, self.data_services)
            if page.name != page_name:
                logger.info(
                    "page_auto_routed application_id=%s task=%s from=%s to=%s",
                    application.id,
                    task_name,
                    page_name,
                    page.name,
                )
            return page
        return page_cls(resolved_body, application, previous_page)

    async def resolve_page(
        self,
        token: str,
        application_id: str,
        task_name: str,
        page_name: str,
        body: Optional[Mapping[str, Any]] = None,
        user_input: Optional[Mapping[str, Any]] = None,
        previous_page: Optional[str] = None,
    ) -> BasePage:
        application = await self.find_application(token, application_id)
        page_cls = self.registry.page(task_name, page_name)
        if previous_page is None:
            previous_page = (self.session or {}).get(PREVIOUS_PAGE_KEY, "")
        return await self.initialize_page(
            page_cls, application, task_name, page_name, token, body, user_input, previous_page
        )

    async def page_for_submission(
        self, token: str, application_id: str, task_name: str, page_name: str, body: Mapping[str, Any]
    ) -> BasePage:
        """Construct the named page from a submitted body, skipping `initialize`."""
        application = await self.find_application(token, application_id)
        page_cls = self.registry.page(task_name, page_name)
        previous_page = (self.session or {}).get(PREVIOUS_PAGE_KEY, "")
        return page_cls(body, application, previous_page)

    async def save(self, page: BasePage, token: str, application_id: str, task_name: str) -> Application:
        """Validate `page` and persist its body as the bag for (task, page.name).

        The application the page was built from is reused, so a submission
        reads the store once. Raises ValidationError without writing anything
        when the page reports errors.
        """
        application = getattr(page, "application", None)
        if application is None or application.id != application_id:
            application = await self.find_application(token, application_id)
        on_save = getattr(page, "on_save", None)
        if on_save is not None:
            page.body = on_save()
        errors = page.errors()
        if errors:
            logger.info(
                "page_invalid application_id=%s task=%s page=%s fields=%s",
                application_id,
                task_name,
                page.name,
                sorted(errors),
            )
            raise ValidationError(errors)

        data = merge_page_answers(application.data, task_name, page.name, page.body)
        updated = await self.store_factory(token).update(application_id, update_payload(data, self.application_type))
        logger.info("page_saved application_id=%s task=%s page=%s", application_id, task_name, page.name)
        publish(
            PAGE_SAVED,
            {
                "application_id": application_id,
                "task": task_name,
                "page": page.name,
                "response": page.response(),
            },
        )
        if self.session is not None:
            self.session[PREVIOUS_PAGE_KEY] = page.name
        return updated

    async def save_data(self, token: str, application_id: str, new_data: Dict[str, Any]) -> Application:
        """Replace the whole application document."""
        updated = await self.store_factory(token).update(application_id, update_payload(new_data, self.application_type))
        logger.info("application_data_saved application_id=%s tasks=%s", application_id, sorted(new_data))
        publish(APPLICATION_DATA_SAVED, {"application_id": application_id, "tasks": sorted(new_data)})
        return updated

    async def import_task_data(self, token: str, application_id: str, task_data: Mapping[str, Any]) -> Application:
        """Merge imported task bags into the stored document and save it."""
        application = await self.find_application(token, application_id)
        updated = await self.save_data(token, application_id, merge_task_data(application.data, task_data))
        publish(OASYS_DATA_IMPORTED, {"application_id": application_id, "tasks": sorted(task_data)})
        return updated

    async def submit(self, token: str, application: Application) -> None:
        payload = submission_payload(application, self.registry, self.application_type)
        await self.store_factory(token).submit(application.id, payload)
        logger.info("application_submitted application_id=%s", application.id)
        publish(APPLICATION_SUBMITTED, {"application_id": application.id})


__all__ = ["WizardService", "page_body", "PREVIOUS_PAGE_KEY"]
