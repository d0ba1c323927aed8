from __future__ import annotations

from typing import Any, Dict, Mapping

from bson import ObjectId
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi


USERS = "users"
PRODUCTS = "products"


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


def connect(uri: str, *, strict: bool = True) -> MongoClient:
    """Create a MongoClient pinned to Stable API v1.

    pymongo connects lazily, so this does not touch the network; use `ping`
    to check reachability.
    """
    return MongoClient(
        uri,
        server_api=ServerApi("1", strict=strict, deprecation_errors=strict),
    )


def get_database(client: Any, name: str) -> Database:
    return client[name]


def users_collection(db: Database) -> Collection:
    return db[USERS]


def products_collection(db: Database) -> Collection:
    return db[PRODUCTS]


def ping(client: Any) -> bool:
    """Return True if the deployment answers `ping`. Never raises on connection errors."""
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        _debug(f"Ping failed: {e}")
        return False
    _debug("Pinged your deployment. You are successfully connected to MongoDB!")
    return True


def ensure_indexes(db: Database) -> None:
    """Create indexes the application relies on (idempotent)."""
    users_collection(db).create_index([("email", ASCENDING)], unique=True, name="email_unique")
    _debug(f"Ensured indexes on {db.name}.{USERS}")


def parse_object_id(value: str) -> ObjectId | None:
    """Return an ObjectId for a 24-hex string, or None when it is not one."""
    if isinstance(value, ObjectId):
        return value
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def public_doc(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """JSON-safe copy of a stored document (ObjectId -> str)."""
    d = dict(doc)
    for k, v in d.items():
        if isinstance(v, ObjectId):
            d[k] = str(v)
    return d
