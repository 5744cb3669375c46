"""Session carrier on top of Starlette's signed-cookie sessions.

Holds the previously visited page and one-shot flash messages (`errors`,
`errorSummary`, `userInput`) across a POST/redirect/GET cycle. The whole
session travels in the cookie, signed with the configured secret, so the
server keeps no per-visitor state.
"""

from __future__ import annotations

from typing import Any, MutableMapping

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from intake.config import SessionConfig

FLASH_KEY = "flash"


def install_sessions(app: FastAPI, config: SessionConfig) -> None:
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.secret_key,
        session_cookie=config.cookie_name,
        max_age=config.max_age_seconds,
        same_site="lax",
    )


def get_session(request: Request) -> MutableMapping[str, Any]:
    """FastAPI dependency returning the current request's session data."""
    return request.session


def flash(session: MutableMapping[str, Any], key: str, value: Any) -> None:
    entries = dict(session.get(FLASH_KEY) or {})
    entries[key] = value
    session[FLASH_KEY] = entries


def consume_flash(session: MutableMapping[str, Any], key: str, default: Any = None) -> Any:
    """Return and remove a flash entry."""
    entries = dict(session.get(FLASH_KEY) or {})
    if key not in entries:
        return default
    value = entries.pop(key)
    if entries:
        session[FLASH_KEY] = entries
    else:
        session.pop(FLASH_KEY, None)
    return value


__all__ = [
    "FLASH_KEY",
    "install_sessions",
    "get_session",
    "flash",
    "consume_flash",
]
