"""Plugin API endpoints."""

from localvol.api.health import router as health_router
from localvol.api.plugin import router as plugin_router

__all__ = [
    "health_router",
    "plugin_router",
]
