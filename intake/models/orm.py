"""ORM model for locally stored applications (development/test store backend)."""

from __future__ import annotations

from sqlalchemy.orm import declarative_base
from sqlalchemy import Column, String, JSON, Text


Base = declarative_base()


class ApplicationRow(Base):  # type: ignore[valid-type]
    __tablename__ = "application"

    application_id = Column(String, primary_key=True)
    crn = Column(String, nullable=False)
    person = Column(JSON, nullable=False)
    data = Column(JSON, nullable=True)
    status = Column(String, nullable=False)
    created_at = Column(Text, nullable=False)
    submitted_at = Column(Text, nullable=True)
    submission = Column(JSON, nullable=True)


__all__ = ["ApplicationRow", "Base"]
