"""
Service layer for client record storage.
"""
from authz_storage.services.client_service import ClientService

__all__ = [
    "ClientService",
]
