"""
Health check router for liveness and storage readiness checks.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from authz_storage.database.connections import get_database
from authz_storage.database.databases.storage_db import COLLECTION_NAME
from authz_storage.database.setup import check_storage

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Liveness check",
)
async def health_check():
    """Returns 200 while the process is serving requests."""
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    summary="Client store readiness",
    responses={503: {"description": "Client collection or its indexes are missing"}},
)
async def readiness_check():
    """
    Readiness check for the client store.

    Ready means MongoDB answers, the client collection exists and its unique
    client.id index is in place. Anything else returns 503 so the instance is
    kept out of rotation until init_storage has run.
    """
    try:
        db = await get_database()
        checks = await check_storage(db)
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "error": str(e)},
        )

    ready = all(checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if ready else "not_ready",
            "collection": COLLECTION_NAME,
            "checks": checks,
        },
    )
