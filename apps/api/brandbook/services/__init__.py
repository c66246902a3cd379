from .storage import storage_service
from .clients import client_service
from .versions import version_service

__all__ = ["storage_service", "client_service", "version_service"]
