"""
Client record models for the storage database.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientRecordMeta(BaseModel):
    """Store-managed envelope. Timestamps are milliseconds since the epoch."""
    created: int = Field(..., description="Set once at insert")
    updated: int = Field(..., description="Refreshed on every successful update")


class ClientRecord(BaseModel):
    """
    Client record document model for the client collection.

    ``client`` is kept as a plain mapping: the store never interprets the
    payload beyond ``id`` and ``sequence``, and returns it exactly as written.
    """
    client: dict[str, Any] = Field(..., description="Client payload with id and sequence")
    meta: ClientRecordMeta


class OAuth2Client(BaseModel):
    """
    Typed view of a stored client payload for authorization callers.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Unique client identifier")
    sequence: int = Field(0, ge=0, description="Optimistic concurrency counter")
    requestable_scopes: Optional[list[str]] = Field(None, alias="requestableScopes")
    allowed_scopes: Optional[list[str]] = Field(None, alias="allowedScopes")
    secret_hash: Optional[str] = Field(None, alias="secretHash")
