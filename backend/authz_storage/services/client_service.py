"""
Client record store.

Durable mapping from client id to client configuration. Updates are guarded
by the record's ``sequence``: a caller submits ``sequence = current + 1`` and
the write only lands if the stored record still has ``current``. The check and
the replace are a single ``update_one`` so two concurrent updaters cannot both
win.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from bson import SON
from motor.motor_asyncio import AsyncIOMotorCursor, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from pymongo.helpers_shared import _index_document

from authz_storage.core.errors import (
    DuplicateError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from authz_storage.database.databases.storage_db import Collections
from authz_storage.database.errors import is_duplicate_error
from authz_storage.models.client import ClientRecord, ClientRecordMeta

logger = logging.getLogger(__name__)

EXPLAIN_VERBOSITY = "executionStats"

GET_PROJECTION = {"_id": 0}

# count() accepts the find() spelling too; count_documents copies its
# keyword arguments into the aggregate command as-is
COUNT_OPTION_ALIASES = {"max_time_ms": "maxTimeMS"}


def now_ms() -> int:
    """Current UTC time in milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def _assert_id(id: Any) -> None:
    if not isinstance(id, str):
        raise InvalidInputError("id (string) is required")


def _assert_client(client: Any) -> None:
    if not isinstance(client, Mapping):
        raise InvalidInputError("client (object) is required")
    if not isinstance(client.get("id"), str):
        raise InvalidInputError("client.id (string) is required")
    sequence = client.get("sequence")
    if not isinstance(sequence, int) or isinstance(sequence, bool):
        raise InvalidInputError("client.sequence (number) is required")


def _count_options(options: Optional[dict[str, Any]]) -> dict[str, Any]:
    return {COUNT_OPTION_ALIASES.get(k, k): v for k, v in (options or {}).items()}


def _count_command(query: dict[str, Any], options: dict[str, Any]) -> SON:
    """
    Build the aggregate command count_documents() sends for these arguments.

    Follows the driver: skip and limit become pipeline stages, a non-string
    hint becomes an index document, and every other option is copied into
    the command.
    """
    options = dict(options)
    pipeline: list[dict[str, Any]] = [{"$match": query}]
    if "skip" in options:
        pipeline.append({"$skip": options.pop("skip")})
    if "limit" in options:
        pipeline.append({"$limit": options.pop("limit")})
    pipeline.append({"$group": {"_id": 1, "n": {"$sum": 1}}})

    if "hint" in options and not isinstance(options["hint"], str):
        options["hint"] = _index_document(options["hint"])

    command = SON([
        ("aggregate", Collections.CLIENTS),
        ("pipeline", pipeline),
        ("cursor", {}),
    ])
    command.update(options)
    return command


class ClientService:
    """Service for client record storage operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        """Initialize with the storage database."""
        self.db = db
        self.collection = db[Collections.CLIENTS]

    # ==================== Query construction ====================

    @staticmethod
    def _get_query(id: str) -> dict[str, Any]:
        return {"client.id": id}

    @staticmethod
    def _update_query(client: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "client.id": client["id"],
            "client.sequence": client["sequence"] - 1,
        }

    @staticmethod
    def _update_document(client: Mapping[str, Any], now: int) -> dict[str, Any]:
        return {"$set": {"client": dict(client), "meta.updated": now}}

    def _find_cursor(
        self,
        query: Optional[dict[str, Any]],
        options: Optional[dict[str, Any]],
    ) -> AsyncIOMotorCursor:
        return self.collection.find(query or {}, **(options or {}))

    # ==================== Operations ====================

    async def get(self, id: str) -> ClientRecord:
        """
        Get a client record by client id.

        Args:
            id: Client id

        Returns:
            The stored record with the MongoDB ``_id`` removed

        Raises:
            InvalidInputError: If id is not a string
            NotFoundError: If no record has this id
        """
        _assert_id(id)

        record = await self.collection.find_one(
            self._get_query(id), projection=GET_PROJECTION
        )
        if not record:
            raise NotFoundError("Client record not found.", {"id": id})
        return ClientRecord(**record)

    async def insert(self, client: Mapping[str, Any]) -> ClientRecord:
        """
        Insert a new client record.

        Args:
            client: Client payload; must have a string ``id`` and ``sequence`` 0

        Returns:
            The inserted record including its generated ``meta``

        Raises:
            InvalidInputError: If client, client.id or client.sequence is missing
            InvalidStateError: If the initial sequence is not 0
            DuplicateError: If a record with the same id already exists
        """
        _assert_client(client)
        if client["sequence"] != 0:
            raise InvalidStateError(
                'Could not insert client record. Initial "sequence" must be "0".'
            )

        now = now_ms()
        record = ClientRecord(
            client=dict(client),
            meta=ClientRecordMeta(created=now, updated=now),
        )

        # insert_one adds _id to the document it is given
        try:
            await self.collection.insert_one(record.model_dump())
        except PyMongoError as cause:
            if not is_duplicate_error(cause):
                raise
            logger.debug("Duplicate client record %s", client["id"])
            raise DuplicateError("Duplicate client record.", {"id": client["id"]}) from cause
        return record

    async def find(
        self,
        query: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> list[dict[str, Any]]:
        """
        Get all client records matching a query.

        ``query`` and ``options`` are passed through to the driver untouched;
        options are find() keyword arguments (projection, sort, limit, skip,
        hint, max_time_ms, batch_size). There is no implicit limit.
        """
        return await self._find_cursor(query, options).to_list(length=None)

    async def count(
        self,
        query: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> int:
        """
        Count client records matching a query.

        Options are count_documents() keyword arguments: skip, limit, hint
        and maxTimeMS (max_time_ms is accepted as an alias).
        """
        return await self.collection.count_documents(
            query or {}, **_count_options(options)
        )

    async def update(self, client: Mapping[str, Any]) -> bool:
        """
        Replace a client record if its sequence is one less than ``client``'s.

        The caller computes the new sequence (stored sequence + 1). The whole
        ``client`` payload is replaced and ``meta.updated`` refreshed. The
        updated record is not returned; call get() to read it.

        Args:
            client: New client payload with ``id`` and the new ``sequence``

        Returns:
            True once the record was updated

        Raises:
            InvalidInputError: If client, client.id or client.sequence is missing
            InvalidStateError: If no record has this id and the expected
                previous sequence
        """
        _assert_client(client)

        result = await self.collection.update_one(
            self._update_query(client),
            self._update_document(client, now_ms()),
        )
        if result.modified_count > 0:
            return True

        expected = client["sequence"] - 1
        logger.debug(
            "Sequence conflict updating client %s: expected %s",
            client["id"], expected,
        )
        raise InvalidStateError(
            "Could not update client record. "
            "Sequence does not match existing record.",
            {"expected": expected},
        )

    # ==================== Explain ====================

    async def explain_get(self, id: str) -> dict[str, Any]:
        """Return the execution plan get() would use."""
        _assert_id(id)
        # find_one() gives no cursor to explain; find().limit(1) is the same query
        cursor = self.collection.find(
            self._get_query(id), projection=GET_PROJECTION
        ).limit(1)
        return await cursor.explain()

    async def explain_find(
        self,
        query: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Return the execution plan find() would use."""
        return await self._find_cursor(query, options).explain()

    async def explain_count(
        self,
        query: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Return the execution plan of the aggregation count() runs."""
        return await self._explain(_count_command(query or {}, _count_options(options)))

    async def explain_update(self, client: Mapping[str, Any]) -> dict[str, Any]:
        """Return the execution plan update() would use, without writing."""
        _assert_client(client)
        return await self._explain(SON([
            ("update", Collections.CLIENTS),
            ("updates", [{
                "q": self._update_query(client),
                "u": self._update_document(client, now_ms()),
                "multi": False,
                "upsert": False,
            }]),
        ]))

    async def _explain(self, command: SON) -> dict[str, Any]:
        return await self.db.command(
            SON([("explain", command), ("verbosity", EXPLAIN_VERBOSITY)])
        )
