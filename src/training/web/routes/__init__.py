"""Route handlers for the Web API."""

from training.web.routes.auth import router as auth_router
from training.web.routes.health import router as health_router
from training.web.routes.modules import router as modules_router
from training.web.routes.profile import router as profile_router
from training.web.routes.progress import router as progress_router

__all__ = [
    "auth_router",
    "health_router",
    "modules_router",
    "profile_router",
    "progress_router",
]
