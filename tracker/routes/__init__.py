"""API route modules for FastAPI endpoints."""

from tracker.routes.health import router as health_router
from tracker.routes.issues import router as issues_router

__all__ = ["health_router", "issues_router"]
