"""Page routes: show a wizard page, save it and import OASys data."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, MutableMapping

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from intake.http.session import consume_flash, flash, get_session
from intake.logic.errors import ValidationError
from intake.logic.pages.base import END_OF_TASK, TASK_LIST
from intake.logic.pages.oasys_import import OasysImport
from intake.logic.wizard import WizardService
from intake.routes.applications import page_url
from intake.routes.dependencies import get_token, get_wizard, request_body

router = APIRouter()
logger = logging.getLogger(__name__)

ROSH_TASK = "risk-of-serious-harm"


def error_summary(errors: Dict[str, str]) -> List[Dict[str, str]]:
    return [{"text": message, "href": f"#{field}"} for field, message in errors.items()]


@router.get("/applications/{application_id}/tasks/{task_name}/pages/{page_name}")
async def show_page(
    application_id: str,
    task_name: str,
    page_name: str,
    token: str = Depends(get_token),
    wizard: WizardService = Depends(get_wizard),
    session: MutableMapping[str, Any] = Depends(get_session),
):
    user_input = consume_flash(session, "userInput")
    errors = consume_flash(session, "errors", {})
    summary = consume_flash(session, "errorSummary", [])
    page = await wizard.resolve_page(token, application_id, task_name, page_name, user_input=user_input)
    return {**page.view(), "applicationId": application_id, "errors": errors, "errorSummary": summary}


@router.post("/applications/{application_id}/tasks/{task_name}/pages/{page_name}")
async def save_page(
    application_id: str,
    task_name: str,
    page_name: str,
    request: Request,
    token: str = Depends(get_token),
    wizard: WizardService = Depends(get_wizard),
    session: MutableMapping[str, Any] = Depends(get_session),
):
    body = await request_body(request)
    page = await wizard.page_for_submission(token, application_id, task_name, page_name, body)
    try:
        await wizard.save(page, token, application_id, task_name)
    except ValidationError as exc:
        flash(session, "errors", exc.errors)
        flash(session, "errorSummary", error_summary(exc.errors))
        flash(session, "userInput", page.body)
        return RedirectResponse(page_url(application_id, task_name, page_name), status_code=303)

    next_page = page.next()
    if next_page in (END_OF_TASK, TASK_LIST):
        return RedirectResponse(f"/applications/{application_id}", status_code=303)
    return RedirectResponse(page_url(application_id, task_name, next_page), status_code=303)


@router.post("/applications/{application_id}/tasks/risk-of-serious-harm/pages/oasys-import/import")
async def import_oasys(
    application_id: str,
    token: str = Depends(get_token),
    wizard: WizardService = Depends(get_wizard),
):
    """Import the OASys answers offered on the oasys-import page."""
    page = await wizard.resolve_page(token, application_id, ROSH_TASK, "oasys-import")
    if not isinstance(page, OasysImport):
        # Already imported or answered by hand
        return RedirectResponse(page_url(application_id, ROSH_TASK, page.name), status_code=303)
    if not page.task_data:
        return RedirectResponse(page_url(application_id, ROSH_TASK, "oasys-import"), status_code=303)
    await wizard.import_task_data(token, application_id, page.task_data)
    return RedirectResponse(page_url(application_id, ROSH_TASK, "summary"), status_code=303)


__all__ = ["router"]
