from __future__ import annotations

from typing import Any

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from core.errors import Conflict
from services.persistence.mongo import (
    CATEGORIES,
    CERTIFICATES,
    STAFF,
    STUDENTS,
    object_id,
    serialize,
    to_mongo,
    to_storage,
)
from services.query.predicates import Predicate


class _Repository:
    collection_name: str

    def __init__(self, db: Database):
        self.col = db[self.collection_name]

    def get(self, doc_id: str, projection: dict[str, int] | None = None) -> dict[str, Any] | None:
        oid = object_id(doc_id)
        if oid is None:
            return None
        return serialize(self.col.find_one({"_id": oid}, projection))

    def insert(self, values: dict[str, Any]) -> dict[str, Any]:
        doc = to_storage(values)
        res = self.col.insert_one(doc)
        doc["_id"] = res.inserted_id
        return serialize(doc)

    def update(self, doc_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
        oid = object_id(doc_id)
        if oid is None:
            return None
        doc = self.col.find_one_and_update(
            {"_id": oid},
            {"$set": to_storage(values)},
            return_document=ReturnDocument.AFTER,
        )
        return serialize(doc)

    def delete(self, doc_id: str) -> bool:
        oid = object_id(doc_id)
        if oid is None:
            return False
        return self.col.delete_one({"_id": oid}).deleted_count == 1


class StudentRepository(_Repository):
    collection_name = STUDENTS

    def find(self, pred: Predicate) -> list[dict[str, Any]]:
        # _id breaks ties between records applied within the same millisecond
        cur = self.col.find(to_mongo(pred)).sort([("appliedDate", DESCENDING), ("_id", DESCENDING)])
        return [serialize(d) for d in cur]

    def nic_taken(self, nic: str, exclude_id: str | None = None) -> bool:
        query: dict[str, Any] = {"nic": nic}
        oid = object_id(exclude_id) if exclude_id else None
        if oid is not None:
            query["_id"] = {"$ne": oid}
        return self.col.find_one(query, {"_id": 1}) is not None

    def insert(self, values: dict[str, Any]) -> dict[str, Any]:
        try:
            return super().insert(values)
        except DuplicateKeyError as e:
            raise Conflict(f"A student with NIC '{values.get('nic')}' is already registered") from e

    def update(self, doc_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
        try:
            return super().update(doc_id, values)
        except DuplicateKeyError as e:
            raise Conflict(f"A student with NIC '{values.get('nic')}' is already registered") from e


class CertificateRepository(_Repository):
    collection_name = CERTIFICATES

    def find(self, pred: Predicate) -> list[dict[str, Any]]:
        cur = self.col.find(to_mongo(pred)).sort([("uploadDate", DESCENDING), ("_id", DESCENDING)])
        return [serialize(d) for d in cur]


class StaffRepository(_Repository):
    collection_name = STAFF
    PUBLIC = {"password": 0}

    def get(self, doc_id: str, projection: dict[str, int] | None = None) -> dict[str, Any] | None:
        return super().get(doc_id, projection or self.PUBLIC)

    def find_by_email(self, email: str, with_password: bool = False) -> dict[str, Any] | None:
        projection = None if with_password else self.PUBLIC
        return serialize(self.col.find_one({"email": email.strip().lower()}, projection))

    def insert(self, values: dict[str, Any]) -> dict[str, Any]:
        try:
            doc = super().insert(values)
        except DuplicateKeyError as e:
            raise Conflict(f"Staff account '{values.get('email')}' already exists") from e
        doc.pop("password", None)
        return doc


class CategoryRepository(_Repository):
    collection_name = CATEGORIES

    def all(self) -> list[dict[str, Any]]:
        return [serialize(d) for d in self.col.find({}).sort("name", 1)]

    def replace_all(self, categories: list[dict[str, Any]]) -> int:
        self.col.delete_many({})
        if not categories:
            return 0
        return len(self.col.insert_many([to_storage(c) for c in categories]).inserted_ids)
