"""API routers package.

This package contains all FastAPI routers for the application.
Each router handles a specific domain of the API.
"""

from .auth import router as auth_router
from .folders import router as folders_router
from .notes import router as notes_router
from .shared import router as shared_router
from .versions import router as versions_router

__all__ = [
    "auth_router",
    "folders_router",
    "notes_router",
    "shared_router",
    "versions_router",
]
