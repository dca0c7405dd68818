from textstore.api.http.health import router as health_router
from textstore.api.http.auth import router as auth_router
from textstore.api.http.entries import router as entries_router

__all__ = [
    "health_router",
    "auth_router",
    "entries_router"
]
