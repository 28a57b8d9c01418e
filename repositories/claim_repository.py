"""Repository for the `claims` collection."""

from __future__ import annotations

from datetime import datetime

from bson import ObjectId

from repositories.base import BaseRepository
from schemas.models.claim import COUNTED_CLAIM_STATUSES, ClaimDoc


class ClaimRepository(BaseRepository[ClaimDoc]):
    collection_name = "claims"
    model = ClaimDoc

    async def count_claimed(self, cause_id: ObjectId) -> int:
        """Count claims of a cause whose status consumes a tote."""
        return await self._col.count_documents(
            {"cause_id": cause_id, "status": {"$in": list(COUNTED_CLAIM_STATUSES)}}
        )

    async def list_recent(self, *, skip: int, limit: int) -> list[ClaimDoc]:
        return await self.find_many(
            {}, sort=[("created_at", -1)], skip=skip, limit=limit
        )

    async def count_by_status(self) -> dict[str, int]:
        cursor = await self._col.aggregate(
            [{"$group": {"_id": "$status", "count": {"$sum": 1}}}]
        )
        rows = await cursor.to_list(length=None)
        return {row["_id"]: row["count"] for row in rows}

    async def count_created_since(self, since: datetime) -> int:
        return await self._col.count_documents({"created_at": {"$gte": since}})
