"""
AuthZ Storage host application - FastAPI

Runs storage initialization at startup and renders storage errors as
HTTP responses for routes that resolve clients from the store.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from authz_storage.config import get_settings
from authz_storage.core.errors import StorageError
from authz_storage.core.logging import setup_logging
from authz_storage.database.connections import close_connections, get_database
from authz_storage.database.setup import init_storage
from authz_storage.routers import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Initialize the MongoDB connection
    - Ensure the client collection and indexes

    Shutdown:
    - Close the database connection
    """
    settings = get_settings()
    setup_logging(settings.log_level)

    logger.info("Starting up AuthZ Storage...")
    db = await get_database()
    await init_storage(db)
    logger.info("Client collection and indexes ready")

    yield

    logger.info("Shutting down AuthZ Storage...")
    await close_connections()
    logger.info("Database connections closed")


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """Render a storage error; non-public errors get a generic body."""
    if not exc.public:
        logger.error("Storage error on %s: %s", request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"type": "OperationError", "message": "An unexpected error occurred."},
        )
    return JSONResponse(status_code=exc.http_status_code, content=exc.to_dict())


app = FastAPI(
    title="AuthZ Storage",
    description="MongoDB storage for OAuth2 client records.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(StorageError, storage_error_handler)
app.include_router(health.router)
