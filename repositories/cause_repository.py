"""Repository for the `causes` collection."""

from __future__ import annotations

import re
from typing import Optional

from bson import ObjectId

from repositories.base import BaseRepository
from schemas.models.cause import CauseDoc
from shared.datetime_utils import utcnow


class CauseRepository(BaseRepository[CauseDoc]):
    collection_name = "causes"
    model = CauseDoc

    async def list_causes(
        self,
        *,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[CauseDoc]:
        query: dict = {}
        if status:
            query["status"] = status
        if category:
            query["category"] = category
        if search:
            pattern = re.compile(re.escape(search), re.IGNORECASE)
            query["$or"] = [{"title": pattern}, {"description": pattern}]
        return await self.find_many(query, sort=[("created_at", -1)])

    async def list_by_creator(self, creator_id: ObjectId) -> list[CauseDoc]:
        return await self.find_many({"creator": creator_id}, sort=[("created_at", -1)])

    async def set_current_amount(self, cause_id: ObjectId, amount: float) -> bool:
        result = await self._col.update_one(
            {"_id": cause_id},
            {"$set": {"current_amount": amount, "updated_at": utcnow()}},
        )
        return result.matched_count == 1
