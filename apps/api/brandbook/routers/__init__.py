from .clients import router as clients_router
from .versions import router as versions_router
from .uploads import router as uploads_router
from .imports import router as imports_router

ROUTERS = (clients_router, versions_router, uploads_router, imports_router)

__all__ = [
    "ROUTERS",
    "clients_router",
    "versions_router",
    "uploads_router",
    "imports_router",
]
