"""Functional test bootstrap.

Tests run against an in-memory SQLite application store and a mocked person
service, so no network or external database is needed. Async tests use the
anyio pytest plugin on the asyncio backend.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import pytest

from intake.clients.application_store import SqlApplicationStore
from intake.clients.person_service import DataServices
from intake.config import ApiConfig, AppConfig, StoreConfig
from intake.db.base import get_engine, reset_engine
from intake.logic.events import get_buffered_events
from intake.logic.registry import build_registry
from intake.models.application import Application, Person

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_process_state():
    """Each test starts with an empty database and no buffered events."""
    reset_engine()
    get_buffered_events(clear=True)
    yield
    reset_engine()
    get_buffered_events(clear=True)


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def person() -> Person:
    return Person(crn="X320741", name="Roger Smith", nomsNumber="A1234BC")


@pytest.fixture
def make_application(person: Person) -> Callable[..., Application]:
    def _make(data: Optional[Dict[str, Any]] = None, application_id: str = "app-1", **fields: Any) -> Application:
        return Application(id=application_id, person=fields.pop("person", person), data=data, **fields)

    return _make


@pytest.fixture
def store() -> SqlApplicationStore:
    return SqlApplicationStore(get_engine(TEST_DATABASE_URL))


@pytest.fixture
def person_service(mocker):
    service = mocker.Mock()
    service.get_oasys_rosh = mocker.AsyncMock(return_value={})
    service.get_rosh_risks = mocker.AsyncMock(return_value={})
    return service


@pytest.fixture
def data_services(person_service) -> DataServices:
    return DataServices(person_service)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        application_api=ApiConfig(url="http://application-api.test"),
        person_api=ApiConfig(url="http://person-api.test"),
        store=StoreConfig(backend="local", database_url=TEST_DATABASE_URL),
    )


@pytest.fixture
def client(app_config, store, data_services):
    from fastapi.testclient import TestClient

    from intake.main import create_app

    app = create_app(config=app_config, store_factory=lambda token: store, data_services=data_services)
    with TestClient(app) as test_client:
        yield test_client
