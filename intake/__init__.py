"""FastAPI application package init for the Application Intake Wizard.

This package exposes a small FastAPI application factory. It wires only
cross-cutting concerns (session carrier, problem+json handlers) and mounts
the API routers. The wizard engine lives in `intake/logic/`, external
collaborators in `intake/clients/` and route handlers in `intake/routes/`.
"""

from __future__ import annotations

from intake.main import create_app

__all__ = ["create_app"]
