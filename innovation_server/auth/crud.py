from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from innovation_server.config import Config
from innovation_server.db import parse_object_id, public_doc, users_collection


ADMIN_ROLE = "admin"

# Keys a caller may never set through self-registration.
_PROTECTED_FIELDS = ("_id", "role")


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


def get_user_by_email(db: Database, email: str | None) -> Optional[Dict[str, Any]]:
    if not email:
        return None
    return users_collection(db).find_one({"email": email})


def is_admin(user: Optional[Mapping[str, Any]]) -> bool:
    return user is not None and user.get("role") == ADMIN_ROLE


def list_users(
    db: Database,
    *,
    email: str | None = None,
    name: str | None = None,
    role: str | None = None,
) -> List[Dict[str, Any]]:
    """List users. Each filter is a case-insensitive regex, e.g. `^alice` or `example`."""
    query: Dict[str, Any] = {}
    for field, value in (("email", email), ("name", name), ("role", role)):
        if value:
            query[field] = {"$regex": value, "$options": "i"}

    return [public_doc(d) for d in users_collection(db).find(query)]


def create_user_if_absent(db: Database, user: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Insert a user unless one with the same email exists.

    Returns the insert result, or None when the email is already registered.
    """
    doc = {k: v for k, v in user.items() if k not in _PROTECTED_FIELDS}
    query = {"email": doc.get("email")}
    _debug(f"create user query: {query}")

    users = users_collection(db)
    if users.find_one(query) is not None:
        return None

    # The unique index closes the race between the lookup and the insert.
    try:
        result = users.insert_one(doc)
    except DuplicateKeyError:
        return None
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def update_user_role(db: Database, email: str, role: str) -> int:
    """Set a user's role. Returns the number of matched users."""
    result = users_collection(db).update_one({"email": email}, {"$set": {"role": role}})
    return int(result.matched_count)


def delete_user(db: Database, user_id: str) -> Dict[str, Any]:
    """Delete by ObjectId. Unknown or malformed ids delete nothing."""
    oid = parse_object_id(user_id)
    if oid is None:
        return {"acknowledged": True, "deletedCount": 0}

    result = users_collection(db).delete_one({"_id": oid})
    return {"acknowledged": result.acknowledged, "deletedCount": int(result.deleted_count)}


def bootstrap_admin_if_needed(cfg: Config, db: Database) -> Optional[Dict[str, Any]]:
    """Make AUTH_BOOTSTRAP_ADMIN_EMAIL an admin if there is no admin yet.

    - Unset/blank email: do nothing.
    - Any admin already present: do nothing.
    - User with that email exists: promote it.
    - Otherwise: insert {email, name: "admin", role: "admin"}.
    """
    email = (getattr(cfg, "AUTH_BOOTSTRAP_ADMIN_EMAIL", "") or "").strip()
    if not email:
        return None

    users = users_collection(db)
    if users.find_one({"role": ADMIN_ROLE}) is not None:
        return None

    if users.find_one({"email": email}) is not None:
        update_user_role(db, email, ADMIN_ROLE)
    else:
        users.insert_one({"email": email, "name": "admin", "role": ADMIN_ROLE})

    return public_doc(users.find_one({"email": email}))
