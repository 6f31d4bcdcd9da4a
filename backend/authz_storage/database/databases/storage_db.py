"""
Storage database configuration.
Stores OAuth2 client records.

Structure:
- basic-authz-server-storage-client: one document per client,
  shaped {client: {id, sequence, ...}, meta: {created, updated}}
"""

# Exported so hosts can add business-rule-specific indexes
COLLECTION_NAME = "basic-authz-server-storage-client"


class Collections:
    """Collection names in the storage database."""
    CLIENTS = COLLECTION_NAME

    # Index definitions for each collection
    INDEXES = {
        CLIENTS: [
            {"keys": [("client.id", 1)], "unique": True},
        ],
    }
