from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text

from intake.clients.application_store import ApplicationStore, HttpApplicationStore, SqlApplicationStore
from intake.clients.person_service import DataServices, PersonService
from intake.config import AppConfig, load_config
from intake.db.base import get_engine
from intake.http.problem import (
    handle_external_service_error,
    handle_http_exception,
    handle_page_not_found,
    handle_request_validation_error,
    handle_task_not_found,
    handle_unexpected_error,
    handle_validation_error,
)
from intake.http.session import install_sessions
from intake.logging_setup import configure_logging
from intake.logic.errors import ExternalServiceError, PageNotFoundError, TaskNotFoundError, ValidationError
from intake.logic.registry import build_registry
from intake.routes import api_router

logger = logging.getLogger(__name__)


def _store_factory(config: AppConfig) -> Callable[[str], ApplicationStore]:
    if config.store.backend == "local":
        store = SqlApplicationStore(get_engine(config.store.database_url))
        return lambda token: store
    return lambda token: HttpApplicationStore(config.application_api, token)


def _health_check(config: AppConfig) -> Callable[[], dict]:
    def check() -> dict:
        if config.store.backend != "local":
            return {"status": "ok", "store": config.store.backend}
        try:
            with get_engine(config.store.database_url).connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Health DB check failed", exc_info=True)
            return {"status": "degraded", "store": "local", "db": False, "reason": str(e)}
        return {"status": "ok", "store": "local", "db": True}

    return check


def create_app(
    config: Optional[AppConfig] = None,
    store_factory: Optional[Callable[[str], Any]] = None,
    data_services: Optional[Any] = None,
) -> FastAPI:
    """Build the FastAPI app.

    Collaborators default to what the configuration describes; tests pass
    their own store factory and data services.
    """
    configure_logging()
    config = config or load_config()
    app = FastAPI(title="Application Intake Wizard")

    app.state.config = config
    app.state.registry = build_registry()
    app.state.store_factory = store_factory or _store_factory(config)
    app.state.data_services = data_services or DataServices(PersonService(config.person_api))

    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(TaskNotFoundError, handle_task_not_found)
    app.add_exception_handler(PageNotFoundError, handle_page_not_found)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(ExternalServiceError, handle_external_service_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    install_sessions(app, config.session)

    app.include_router(api_router)

    health_check = _health_check(config)

    @app.get("/health")
    def health():  # pragma: no cover - trivial
        return health_check()

    logger.info("app_created store=%s tasks=%s", config.store.backend, len(app.state.registry.task_names()))
    return app
