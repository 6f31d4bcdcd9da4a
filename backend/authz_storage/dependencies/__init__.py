"""
Dependencies for dependency injection in routes.
"""
from authz_storage.dependencies.clients import get_client_service, get_oauth2_client

__all__ = [
    "get_client_service",
    "get_oauth2_client",
]
