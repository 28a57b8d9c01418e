"""
BaseRepository: shared CRUD helpers over a single async collection.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from pymongo import ReturnDocument

from schemas.models.base import MongoBaseModel
from shared.datetime_utils import utcnow

T = TypeVar("T", bound=MongoBaseModel)


class BaseRepository(Generic[T]):
    """Typed wrapper around one collection of the async database."""

    collection_name: str = ""
    model: type[T]

    def __init__(self, db: Any) -> None:
        self._db = db
        self._col = db[self.collection_name]

    @property
    def collection(self):
        return self._col

    def _to_model(self, doc: Optional[dict]) -> Optional[T]:
        return self.model.from_mongo(doc)

    async def find_by_id(self, doc_id: ObjectId, *, session=None) -> Optional[T]:
        doc = await self._col.find_one({"_id": doc_id}, session=session)
        return self._to_model(doc)

    async def find_many(
        self,
        query: dict,
        *,
        sort: Optional[list[tuple[str, int]]] = None,
        skip: int = 0,
        limit: int = 0,
        session=None,
    ) -> list[T]:
        cursor = self._col.find(query, session=session)
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=None)
        return [self.model.from_mongo(d) for d in docs]

    async def insert(self, model: T, *, session=None) -> T:
        """Insert *model*, stamping created_at/updated_at when the model has them."""
        now = utcnow()
        fields = type(model).model_fields
        if "created_at" in fields and getattr(model, "created_at") is None:
            model.created_at = now
        if "updated_at" in fields:
            model.updated_at = now
        result = await self._col.insert_one(model.to_mongo(), session=session)
        model.id = result.inserted_id
        return model

    async def update_fields(
        self, doc_id: ObjectId, fields: dict, *, session=None
    ) -> Optional[T]:
        """``$set`` *fields* (plus updated_at) and return the updated document."""
        updates = {**fields}
        if "updated_at" in self.model.model_fields:
            updates["updated_at"] = utcnow()
        doc = await self._col.find_one_and_update(
            {"_id": doc_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        return self._to_model(doc)

    async def delete_by_id(self, doc_id: ObjectId, *, session=None) -> bool:
        result = await self._col.delete_one({"_id": doc_id}, session=session)
        return result.deleted_count == 1

    async def count(self, query: dict, *, session=None) -> int:
        return await self._col.count_documents(query, session=session)
