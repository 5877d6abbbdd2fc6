"""
Database helpers

Thin wrappers around a pymongo database handle. Every collection is named
after the lowercased record kind ("submission", "project").

The handle is created from DATABASE_URL / DATABASE_NAME at import time and
left as None when either is missing; the helpers raise DatabaseUnavailable
in that case so callers can report a generic failure.
"""

import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel
from pymongo import DESCENDING, MongoClient
from pymongo.errors import PyMongoError

_client = None
db = None

database_url = os.getenv("DATABASE_URL")
database_name = os.getenv("DATABASE_NAME")

if database_url and database_name:
    _client = MongoClient(database_url)
    db = _client[database_name]

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


class DatabaseUnavailable(PyMongoError):
    """Raised when DATABASE_URL / DATABASE_NAME were not configured."""


def get_db():
    if db is None:
        raise DatabaseUnavailable(
            "Database not available. Check DATABASE_URL and DATABASE_NAME environment variables."
        )
    return db


def create_document(collection_name: str, data: Union[BaseModel, dict]) -> str:
    """Insert a document, stamping created_at/updated_at. Returns the new id."""
    if isinstance(data, BaseModel):
        data_dict = data.model_dump()
    else:
        data_dict = data.copy()
    data_dict.pop("_id", None)
    data_dict.pop("id", None)

    now = datetime.now(timezone.utc)
    data_dict["created_at"] = now
    data_dict["updated_at"] = now

    result = get_db()[collection_name].insert_one(data_dict)
    return str(result.inserted_id)


def get_documents(
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Find documents newest-first. Zero matches yield an empty list."""
    cursor = get_db()[collection_name].find(filter_dict or {}).sort(NEWEST_FIRST)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def get_document(collection_name: str, oid: ObjectId) -> Optional[Dict[str, Any]]:
    return get_db()[collection_name].find_one({"_id": oid})


def update_document(collection_name: str, oid: ObjectId, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Apply a $set patch. Returns the updated document, or None if no match."""
    changes = {**changes, "updated_at": datetime.now(timezone.utc)}
    res = get_db()[collection_name].update_one({"_id": oid}, {"$set": changes})
    if res.matched_count == 0:
        return None
    return get_document(collection_name, oid)


def delete_document(collection_name: str, oid: ObjectId) -> bool:
    """Delete one document. False means nothing matched."""
    res = get_db()[collection_name].delete_one({"_id": oid})
    return res.deleted_count == 1


def count_documents(collection_name: str, filter_dict: Optional[Dict[str, Any]] = None) -> int:
    return get_db()[collection_name].count_documents(filter_dict or {})
