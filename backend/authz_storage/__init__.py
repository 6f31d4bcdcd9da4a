"""
Basic AuthZ Server Storage - MongoDB persistence for OAuth2 client records.
"""
from authz_storage.database.databases.storage_db import COLLECTION_NAME
from authz_storage.database.setup import init_storage
from authz_storage.services.client_service import ClientService

__all__ = [
    "COLLECTION_NAME",
    "ClientService",
    "init_storage",
]
