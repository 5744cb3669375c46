"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from typing import Any, Dict, MutableMapping

from fastapi import Depends, Request

from intake.http.session import get_session
from intake.logic.wizard import WizardService


def get_token(request: Request) -> str:
    """Bearer token passed through to upstream APIs untouched."""
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer":
        return token.strip()
    return ""


def get_wizard(request: Request, session: MutableMapping[str, Any] = Depends(get_session)) -> WizardService:
    state = request.app.state
    return WizardService(
        state.registry,
        state.store_factory,
        state.data_services,
        session,
        application_type=state.config.application_type,
    )


async def request_body(request: Request) -> Dict[str, Any]:
    """Read a page submission from either a JSON or an HTML form body.

    Repeated form fields (checkboxes) become lists.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        payload = await request.json()
        return dict(payload) if isinstance(payload, dict) else {}
    form = await request.form()
    body: Dict[str, Any] = {}
    for key in form.keys():
        values = [str(v) for v in form.getlist(key)]
        body[key] = values if len(values) > 1 else values[0]
    return body


__all__ = ["get_token", "get_wizard", "request_body"]
