"""
Database module - MongoDB connection, collection definitions and setup.
"""
from authz_storage.database.connections import (
    get_mongo_client,
    close_connections,
    get_database,
)
from authz_storage.database.databases import storage_db
from authz_storage.database.errors import is_duplicate_error
from authz_storage.database.setup import check_storage, init_storage

__all__ = [
    "get_mongo_client",
    "close_connections",
    "get_database",
    "storage_db",
    "is_duplicate_error",
    "init_storage",
    "check_storage",
]
