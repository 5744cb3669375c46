"""APIRouter registration for the application intake wizard."""

from __future__ import annotations

from fastapi import APIRouter

from intake.routes.applications import router as applications_router
from intake.routes.pages import router as pages_router

api_router = APIRouter()
api_router.include_router(applications_router)
api_router.include_router(pages_router)

__all__ = ["api_router"]
