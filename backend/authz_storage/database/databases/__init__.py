"""
Database definitions and collection constants.
"""
from authz_storage.database.databases import storage_db

__all__ = ["storage_db"]
