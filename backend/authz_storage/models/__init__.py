"""
Pydantic models for database documents.
"""
from authz_storage.models.client import ClientRecord, ClientRecordMeta, OAuth2Client

__all__ = [
    "ClientRecord",
    "ClientRecordMeta",
    "OAuth2Client",
]
