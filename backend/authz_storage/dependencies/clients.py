"""
Client lookup dependencies for authorization routes.
"""
from typing import Annotated

from fastapi import Depends, Path

from authz_storage.database.connections import get_database
from authz_storage.models.client import OAuth2Client
from authz_storage.services.client_service import ClientService


async def get_client_service() -> ClientService:
    """Dependency to get ClientService instance."""
    db = await get_database()
    return ClientService(db)


async def get_oauth2_client(
    client_id: Annotated[str, Path(description="OAuth2 client id")],
    client_service: Annotated[ClientService, Depends(get_client_service)],
) -> OAuth2Client:
    """
    Resolve a stored OAuth2 client by id.

    Raises:
        NotFoundError: If no client record has this id (rendered as 404)
    """
    record = await client_service.get(client_id)
    return OAuth2Client(**record.client)
