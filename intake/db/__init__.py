"""Database helpers for the local application store backend."""

from intake.db.base import get_engine, get_sessionmaker, reset_engine, session_scope

__all__ = [
    "get_engine",
    "get_sessionmaker",
    "reset_engine",
    "session_scope",
]
