from __future__ import annotations

import logging
import re
from datetime import date, datetime, time
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from core.config import Settings
from services.query.predicates import AllOf, AnyOf, Contains, Eq, NotEq, Predicate

logger = logging.getLogger(__name__)

STUDENTS = "students"
CERTIFICATES = "certificates"
STAFF = "staff"
CATEGORIES = "categories"


def connect(cfg: Settings) -> MongoClient:
    """Open the client once at startup; the caller owns and closes it."""
    logger.info("connecting to mongo db=%s", cfg.MONGO_DB)
    return MongoClient(cfg.MONGO_URL, serverSelectionTimeoutMS=2000, tz_aware=True)


def ensure_indexes(db: Database) -> None:
    db[STUDENTS].create_index([("nic", ASCENDING)], unique=True)
    db[STUDENTS].create_index([("appliedDate", DESCENDING)])
    db[STUDENTS].create_index([("status", ASCENDING), ("disabled", ASCENDING)])
    db[CERTIFICATES].create_index([("uploadDate", DESCENDING)])
    db[CERTIFICATES].create_index([("studentId", ASCENDING)])
    db[CERTIFICATES].create_index([("nic", ASCENDING)])
    db[STAFF].create_index([("email", ASCENDING)], unique=True)


def to_mongo(pred: Predicate) -> dict[str, Any]:
    """Translate a storage-neutral predicate into a Mongo filter document."""
    if isinstance(pred, Eq):
        return {pred.field: pred.value}
    if isinstance(pred, NotEq):
        return {pred.field: {"$ne": pred.value}}
    if isinstance(pred, Contains):
        return {pred.field: {"$regex": re.escape(pred.text), "$options": "i"}}
    if isinstance(pred, AnyOf):
        return {"$or": [to_mongo(c) for c in pred.clauses]}
    if isinstance(pred, AllOf):
        parts = [to_mongo(c) for c in pred.clauses]
        if not parts:
            return {}
        if len(parts) == 1:
            return parts[0]
        return {"$and": parts}
    raise TypeError(f"unsupported predicate: {pred!r}")


def to_storage(values: dict[str, Any]) -> dict[str, Any]:
    """BSON has no date type; store calendar dates as midnight datetimes."""
    out: dict[str, Any] = {}
    for k, v in values.items():
        if isinstance(v, date) and not isinstance(v, datetime):
            v = datetime.combine(v, time.min)
        out[k] = v
    return out


def object_id(raw: str) -> ObjectId | None:
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        return None


def serialize(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    if doc is None:
        return None
    out = dict(doc)
    if "_id" in out:
        out["_id"] = str(out["_id"])
    return out
