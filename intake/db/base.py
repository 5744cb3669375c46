"""Database plumbing for the local application store.

Production keeps applications in the remote application API. The local
backend stores whole application documents in one table so the wizard can
run without it; SQLite in memory is the default.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from intake.models.orm import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"

_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def _engine_options(url: str) -> dict:
    options: dict = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # every session and worker thread must see the same in-memory database
            options["poolclass"] = StaticPool
    return options


def get_engine(url: str | None = None) -> Engine:
    """Return the shared engine, creating it (and the schema) on first use or URL change."""
    global _ENGINE, _ENGINE_URL
    wanted = url or _ENGINE_URL or DEFAULT_DATABASE_URL
    if _ENGINE is not None and _ENGINE_URL == wanted:
        return _ENGINE

    engine = create_engine(wanted, **_engine_options(wanted))
    Base.metadata.create_all(engine)
    _ENGINE, _ENGINE_URL = engine, wanted
    logger.info("db_engine_ready url=%s", make_url(wanted).render_as_string(hide_password=True))
    return engine


def reset_engine() -> None:
    """Drop the shared engine; an in-memory database is discarded with it."""
    global _ENGINE, _ENGINE_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = _ENGINE_URL = None


def get_sessionmaker(engine: Engine | None = None) -> sessionmaker:
    return sessionmaker(bind=engine or get_engine(), future=True, expire_on_commit=False)


@contextmanager
def session_scope(engine: Engine | None = None) -> Generator[Session, None, None]:
    """One unit of work: commit when the block succeeds, otherwise roll back and re-raise."""
    session = get_sessionmaker(engine)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.error("db_transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()
