"""Application routes: create, list, overview, review and submission."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from intake.logic.answers import check_your_answers_sections
from intake.logic.pages.base import is_answered, name_or_placeholder
from intake.logic.task_status import task_list
from intake.logic.wizard import WizardService
from intake.models.application import NewApplication
from intake.routes.dependencies import get_token, get_wizard

router = APIRouter()
logger = logging.getLogger(__name__)

ELIGIBILITY_TASK = "confirm-eligibility"


def page_url(application_id: str, task_name: str, page_name: str) -> str:
    return f"/applications/{application_id}/tasks/{task_name}/pages/{page_name}"


@router.post("/applications", status_code=201)
async def create_application(
    payload: NewApplication,
    token: str = Depends(get_token),
    wizard: WizardService = Depends(get_wizard),
):
    application = await wizard.create_application(token, payload.crn)
    return JSONResponse(application.model_dump(by_alias=True), status_code=201)


@router.get("/applications")
async def list_applications(token: str = Depends(get_token), wizard: WizardService = Depends(get_wizard)):
    grouped = await wizard.get_all_for_user(token)
    return {status: [s.model_dump(by_alias=True) for s in summaries] for status, summaries in grouped.items()}


@router.get("/applications/{application_id}")
async def show_application(
    application_id: str,
    request: Request,
    token: str = Depends(get_token),
    wizard: WizardService = Depends(get_wizard),
):
    """Task list for the application; eligibility must be answered first."""
    application = await wizard.find_application(token, application_id)
    eligibility = application.page_data(ELIGIBILITY_TASK, ELIGIBILITY_TASK) or {}
    is_eligible = eligibility.get("isEligible") if isinstance(eligibility, dict) else None
    if not is_answered(is_eligible):
        return RedirectResponse(page_url(application_id, ELIGIBILITY_TASK, ELIGIBILITY_TASK), status_code=303)
    view = task_list(application, request.app.state.registry)
    return {
        "application": application.model_dump(by_alias=True),
        "eligible": is_eligible == "yes",
        "taskList": view.model_dump(),
    }


@router.get("/applications/{application_id}/check-your-answers")
async def check_your_answers(
    application_id: str,
    request: Request,
    token: str = Depends(get_token),
    wizard: WizardService = Depends(get_wizard),
):
    application = await wizard.find_application(token, application_id)
    return {
        "applicationId": application.id,
        "personName": name_or_placeholder(application.person),
        "sections": check_your_answers_sections(application, request.app.state.registry),
    }


@router.post("/applications/{application_id}/submission")
async def submit_application(
    application_id: str,
    token: str = Depends(get_token),
    wizard: WizardService = Depends(get_wizard),
):
    application = await wizard.find_application(token, application_id)
    await wizard.submit(token, application)
    return {"applicationId": application.id, "status": "submitted"}


__all__ = ["router", "page_url"]
