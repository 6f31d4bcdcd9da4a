"""
Storage initialization.

Called explicitly by the host application during its startup sequence.
Safe to run on every process start.
"""
import logging

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import CollectionInvalid

from authz_storage.database.databases.storage_db import Collections

logger = logging.getLogger(__name__)


async def init_storage(db: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
    """
    Ensure the client collection and its indexes exist.

    Args:
        db: Storage database handle

    Returns:
        The client record collection
    """
    existing = await db.list_collection_names()
    if Collections.CLIENTS not in existing:
        try:
            await db.create_collection(Collections.CLIENTS)
            logger.info("Created collection %s", Collections.CLIENTS)
        except CollectionInvalid:
            # Another process created it first
            pass

    collection = db[Collections.CLIENTS]
    for index_def in Collections.INDEXES[Collections.CLIENTS]:
        keys = index_def["keys"]
        kwargs = {k: v for k, v in index_def.items() if k != "keys"}
        name = await collection.create_index(keys, **kwargs)
        logger.info("Ensured index %s on %s", name, Collections.CLIENTS)

    return collection


async def check_storage(db: AsyncIOMotorDatabase) -> dict[str, bool]:
    """
    Report whether init_storage has run against this database.

    Returns:
        {"collection": ..., "indexes": ...}; indexes is True only when every
        index in the definitions exists with the same keys and uniqueness
    """
    existing = await db.list_collection_names()
    if Collections.CLIENTS not in existing:
        return {"collection": False, "indexes": False}

    info = await db[Collections.CLIENTS].index_information()
    present = {
        (
            tuple((k, d if isinstance(d, str) else int(d)) for k, d in idx["key"]),
            bool(idx.get("unique", False)),
        )
        for idx in info.values()
    }
    required = {
        (tuple(index_def["keys"]), bool(index_def.get("unique", False)))
        for index_def in Collections.INDEXES[Collections.CLIENTS]
    }
    return {"collection": True, "indexes": required <= present}
