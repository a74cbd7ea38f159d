# (c) Copyright Datacraft, 2026
"""API routers."""
from .authorize import router as authorize_router
from .relationships import router as relationships_router
from .system import router as system_router

__all__ = ["authorize_router", "relationships_router", "system_router"]
