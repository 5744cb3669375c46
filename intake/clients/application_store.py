"""Application store clients.

`HttpApplicationStore` talks to the remote application API, which is the
system of record. `SqlApplicationStore` keeps applications in a local
SQLAlchemy database for development and tests. Both raise
`ExternalServiceError` for failures so callers see one error shape.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

import anyio
import httpx
from sqlalchemy import select
from sqlalchemy.engine import Engine

from intake.clients.api_client import ApiClient
from intake.config import ApiConfig
from intake.db.base import get_engine, session_scope
from intake.logic.errors import ExternalServiceError
from intake.models.application import Application, ApplicationStatus, ApplicationSummary
from intake.models.orm import ApplicationRow

logger = logging.getLogger(__name__)


class ApplicationStore(Protocol):
    async def get(self, application_id: str) -> Application: ...

    async def create(self, crn: str) -> Application: ...

    async def update(self, application_id: str, payload: Dict[str, Any]) -> Application: ...

    async def submit(self, application_id: str, payload: Dict[str, Any]) -> None: ...

    async def all(self) -> List[ApplicationSummary]: ...


class ApplicationApi(ApiClient):
    source = "application-api"


class HttpApplicationStore:
    def __init__(self, config: ApiConfig, token: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._api = ApplicationApi(config, token, transport=transport)

    async def get(self, application_id: str) -> Application:
        return Application.model_validate(await self._api.request("GET", f"/cas2/applications/{application_id}"))

    async def create(self, crn: str) -> Application:
        return Application.model_validate(await self._api.request("POST", "/cas2/applications", json={"crn": crn}))

    async def update(self, application_id: str, payload: Dict[str, Any]) -> Application:
        body = await self._api.request("PUT", f"/cas2/applications/{application_id}", json=payload)
        return Application.model_validate(body)

    async def submit(self, application_id: str, payload: Dict[str, Any]) -> None:
        await self._api.request("POST", "/cas2/submissions", json=payload)

    async def all(self) -> List[ApplicationSummary]:
        body = await self._api.request("GET", "/cas2/applications")
        return [ApplicationSummary.model_validate(item) for item in body or []]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _to_application(row: ApplicationRow) -> Application:
    return Application.model_validate(
        {
            "id": row.application_id,
            "person": row.person,
            "data": row.data,
            "status": row.status,
            "createdAt": row.created_at,
            "submittedAt": row.submitted_at,
        }
    )


def _not_found(application_id: str) -> ExternalServiceError:
    return ExternalServiceError(404, {"detail": f"application {application_id} not found"}, source="local-store")


class SqlApplicationStore:
    """Local application store backed by SQLAlchemy.

    Blocking database work runs in a worker thread. Writes to a submitted
    application are rejected with status 409.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine or get_engine()

    def _get(self, application_id: str) -> Application:
        with session_scope(self._engine) as session:
            row = session.get(ApplicationRow, application_id)
            application = _to_application(row) if row is not None else None
        if application is None:
            raise _not_found(application_id)
        return application

    def _create(self, crn: str) -> Application:
        row = ApplicationRow(
            application_id=str(uuid.uuid4()),
            crn=crn,
            person={"crn": crn},
            data=None,
            status=ApplicationStatus.IN_PROGRESS,
            created_at=_now(),
        )
        with session_scope(self._engine) as session:
            session.add(row)
            session.flush()
            application = _to_application(row)
        logger.info("application_created application_id=%s", application.id)
        return application

    @staticmethod
    def _write_error(row: Optional[ApplicationRow], application_id: str) -> Optional[ExternalServiceError]:
        if row is None:
            return _not_found(application_id)
        if row.status == ApplicationStatus.SUBMITTED:
            return ExternalServiceError(409, {"detail": "application already submitted"}, source="local-store")
        return None

    def _update(self, application_id: str, payload: Dict[str, Any]) -> Application:
        with session_scope(self._engine) as session:
            row = session.get(ApplicationRow, application_id)
            error = self._write_error(row, application_id)
            if error is None:
                row.data = payload.get("data")
                session.flush()
                application = _to_application(row)
        if error is not None:
            raise error
        return application

    def _submit(self, application_id: str, payload: Dict[str, Any]) -> None:
        with session_scope(self._engine) as session:
            row = session.get(ApplicationRow, application_id)
            error = self._write_error(row, application_id)
            if error is None:
                row.status = ApplicationStatus.SUBMITTED
                row.submitted_at = _now()
                row.submission = payload
        if error is not None:
            raise error
        logger.info("application_submitted application_id=%s", application_id)

    def _all(self) -> List[ApplicationSummary]:
        with session_scope(self._engine) as session:
            rows = session.execute(select(ApplicationRow).order_by(ApplicationRow.created_at)).scalars().all()
            return [
                ApplicationSummary.model_validate(
                    {
                        "id": row.application_id,
                        "person": row.person,
                        "status": row.status,
                        "createdAt": row.created_at,
                        "submittedAt": row.submitted_at,
                    }
                )
                for row in rows
            ]

    def _put(self, application: Application) -> Application:
        row = ApplicationRow(
            application_id=application.id,
            crn=application.person.crn,
            person=application.person.model_dump(by_alias=True, exclude_none=True),
            data=application.data,
            status=application.status,
            created_at=application.created_at or _now(),
            submitted_at=application.submitted_at,
        )
        with session_scope(self._engine) as session:
            session.merge(row)
        return application

    def submission(self, application_id: str) -> Optional[Dict[str, Any]]:
        """Return the stored submission payload, if any."""
        with session_scope(self._engine) as session:
            row = session.get(ApplicationRow, application_id)
            return row.submission if row is not None else None

    async def get(self, application_id: str) -> Application:
        return await anyio.to_thread.run_sync(self._get, application_id)

    async def create(self, crn: str) -> Application:
        return await anyio.to_thread.run_sync(self._create, crn)

    async def update(self, application_id: str, payload: Dict[str, Any]) -> Application:
        return await anyio.to_thread.run_sync(self._update, application_id, payload)

    async def submit(self, application_id: str, payload: Dict[str, Any]) -> None:
        await anyio.to_thread.run_sync(self._submit, application_id, payload)

    async def all(self) -> List[ApplicationSummary]:
        return await anyio.to_thread.run_sync(self._all)

    async def put(self, application: Application) -> Application:
        return await anyio.to_thread.run_sync(self._put, application)


__all__ = ["ApplicationStore", "ApplicationApi", "HttpApplicationStore", "SqlApplicationStore"]
