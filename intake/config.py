"""Configuration utilities for the Application Intake Wizard.

This module loads application configuration with the following rules:
- Primary source: `intake_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_INTAKE_CONFIG = Path("intake_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class ApiConfig(BaseModel):
    url: str
    timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip().startswith(("http://", "https://")):
            raise ValueError("api url must be an http(s) URL")
        return v.strip().rstrip("/")


class StoreConfig(BaseModel):
    backend: str  # one of: http, local
    database_url: str = Field(default="sqlite+pysqlite:///:memory:")

    @field_validator("backend")
    @classmethod
    def backend_must_be_allowed(cls, v: str) -> str:
        allowed = {"http", "local"}
        if v not in allowed:
            raise ValueError(f"store.backend must be one of {sorted(allowed)}")
        return v


DEV_SESSION_SECRET = "intake-dev-session-secret-not-for-production"


class SessionConfig(BaseModel):
    cookie_name: str = Field(default="intake_session", min_length=1)
    secret_key: str = Field(default=DEV_SESSION_SECRET, min_length=16)
    max_age_seconds: int = Field(default=60 * 60 * 4, gt=0)


class AppConfig(BaseModel):
    application_api: ApiConfig
    person_api: ApiConfig
    store: StoreConfig
    session: SessionConfig = Field(default_factory=SessionConfig)
    application_type: str = Field(default="CAS2", min_length=1)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) intake_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_INTAKE_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    # Upstream APIs
    application_api_url = (
        _env("APPLICATION_API_URL")
        or _read_config_file("application_api.url")
        or _base("application_api.url", "http://localhost:8080")
    )
    application_api_timeout = (
        _env("APPLICATION_API_TIMEOUT")
        or _read_config_file("application_api.timeout")
        or _base("application_api.timeout_seconds", "10")
    )
    person_api_url = (
        _env("PERSON_API_URL")
        or _read_config_file("person_api.url")
        or _base("person_api.url", "http://localhost:8080")
    )
    person_api_timeout = (
        _env("PERSON_API_TIMEOUT")
        or _read_config_file("person_api.timeout")
        or _base("person_api.timeout_seconds", "10")
    )

    # Application store
    backend = (_env("APPLICATION_STORE") or _read_config_file("store.backend") or _base("store.backend", "local")).strip()
    database_url = (
        _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("store.database_url", "sqlite+pysqlite:///:memory:")
    )

    cookie_name = _env("SESSION_COOKIE_NAME") or _base("session.cookie_name", "intake_session")
    session_secret = (
        _env("SESSION_SECRET_KEY") or _read_config_file("session.secret") or _base("session.secret_key", DEV_SESSION_SECRET)
    )
    session_max_age = _env("SESSION_MAX_AGE") or _base("session.max_age_seconds", str(60 * 60 * 4))
    application_type = _env("APPLICATION_TYPE") or _base("application_type", "CAS2")

    try:
        cfg = AppConfig(
            application_api=ApiConfig(url=application_api_url, timeout_seconds=float(str(application_api_timeout).strip())),
            person_api=ApiConfig(url=person_api_url, timeout_seconds=float(str(person_api_timeout).strip())),
            store=StoreConfig(backend=backend, database_url=database_url),
            session=SessionConfig(
                cookie_name=cookie_name, secret_key=session_secret, max_age_seconds=int(str(session_max_age).strip())
            ),
            application_type=application_type,
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "ApiConfig",
    "StoreConfig",
    "SessionConfig",
    "load_config",
]
