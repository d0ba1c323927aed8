from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pymongo.database import Database

from innovation_server.db import parse_object_id, products_collection, public_doc
from innovation_server.util.time import utcnow


def create_product(db: Database, product: Mapping[str, Any]) -> Dict[str, Any]:
    doc = dict(product)
    doc["createdAt"] = utcnow()
    result = products_collection(db).insert_one(doc)
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def list_products(db: Database) -> List[Dict[str, Any]]:
    return [public_doc(d) for d in products_collection(db).find()]


def get_product(db: Database, product_id: str) -> Optional[Dict[str, Any]]:
    """Find a product by ObjectId, falling back to the raw string key.

    Products created with a caller-chosen `_id` are stored under that string,
    so a 24-hex id can legitimately miss as an ObjectId and hit as a string.
    """
    products = products_collection(db)

    oid = parse_object_id(product_id)
    if oid is not None:
        doc = products.find_one({"_id": oid})
        if doc is not None:
            return public_doc(doc)

    doc = products.find_one({"_id": product_id})
    if doc is None:
        return None
    return public_doc(doc)
