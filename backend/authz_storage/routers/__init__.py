"""
API Routers module.
"""
from authz_storage.routers import health

__all__ = ["health"]
