"""Repositories for `distribution-locations` and `physical-distributions`."""

from __future__ import annotations

import re
from typing import Iterable, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from repositories.base import BaseRepository
from schemas.models.distribution import (
    DistributionLocationDoc,
    PhysicalDistributionDoc,
)
from shared.datetime_utils import utcnow


class DistributionLocationRepository(BaseRepository[DistributionLocationDoc]):
    collection_name = "distribution-locations"
    model = DistributionLocationDoc

    async def list_locations(
        self,
        *,
        location_type: Optional[str] = None,
        is_active: Optional[bool] = None,
        city: Optional[str] = None,
    ) -> list[DistributionLocationDoc]:
        query: dict = {}
        if location_type:
            query["type"] = location_type
        if is_active is not None:
            query["is_active"] = is_active
        if city:
            query["city"] = re.compile(re.escape(city), re.IGNORECASE)
        return await self.find_many(query, sort=[("name", 1)])

    async def existing_ids(
        self, location_ids: Iterable[ObjectId], *, session=None
    ) -> set[ObjectId]:
        ids = list(location_ids)
        cursor = self._col.find({"_id": {"$in": ids}}, {"_id": 1}, session=session)
        docs = await cursor.to_list(length=None)
        return {d["_id"] for d in docs}

    async def increment_totes(
        self, location_id: ObjectId, delta: int, *, session=None
    ) -> None:
        """Atomically add *delta* (may be negative) to a location's totes_count."""
        await self._col.update_one(
            {"_id": location_id},
            {"$inc": {"totes_count": delta}, "$set": {"updated_at": utcnow()}},
            session=session,
        )

    async def set_totes_count(self, location_id: ObjectId, count: int) -> None:
        await self._col.update_one(
            {"_id": location_id},
            {"$set": {"totes_count": count, "updated_at": utcnow()}},
        )


class PhysicalDistributionRepository(BaseRepository[PhysicalDistributionDoc]):
    collection_name = "physical-distributions"
    model = PhysicalDistributionDoc

    async def find_by_sponsorship(
        self, sponsorship_id: ObjectId, *, session=None
    ) -> Optional[PhysicalDistributionDoc]:
        doc = await self._col.find_one({"sponsorship": sponsorship_id}, session=session)
        return self._to_model(doc)

    async def list_all(self) -> list[PhysicalDistributionDoc]:
        return await self.find_many({}, sort=[("created_at", -1)])

    async def allocated_by_location(self) -> dict[ObjectId, int]:
        """Sum allocated quantity per location across every distribution."""
        cursor = await self._col.aggregate(
            [
                {"$unwind": "$distribution_locations"},
                {
                    "$group": {
                        "_id": "$distribution_locations.location",
                        "total": {"$sum": "$distribution_locations.quantity"},
                    }
                },
            ]
        )
        rows = await cursor.to_list(length=None)
        return {row["_id"]: int(row["total"]) for row in rows}

    async def update_location_entry(
        self,
        distribution_id: ObjectId,
        location_id: ObjectId,
        fields: dict,
        *,
        session=None,
    ) -> Optional[PhysicalDistributionDoc]:
        """``$set`` *fields* on the one allocation entry for *location_id*.

        The rest of ``distribution_locations`` is left as stored. Returns the
        updated document, or None when the distribution does not exist or has
        no entry for that location.
        """
        updates = {f"distribution_locations.$.{k}": v for k, v in fields.items()}
        updates["updated_at"] = utcnow()
        doc = await self._col.find_one_and_update(
            {"_id": distribution_id, "distribution_locations.location": location_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
            session=session,
        )
        return self._to_model(doc)
