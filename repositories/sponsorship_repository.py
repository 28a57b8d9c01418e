"""Repository for the `sponsorships` collection."""

from __future__ import annotations

from typing import NamedTuple

from bson import ObjectId

from repositories.base import BaseRepository
from schemas.models.sponsorship import (
    DISTRIBUTION_TYPE_PHYSICAL,
    SPONSORSHIP_STATUS_APPROVED,
    SPONSORSHIP_STATUS_PENDING,
    SponsorshipDoc,
)
from shared.datetime_utils import utcnow


class ApprovedTotals(NamedTuple):
    """Aggregate over a cause's approved sponsorships."""

    total_amount: float
    total_totes: int


class SponsorshipRepository(BaseRepository[SponsorshipDoc]):
    collection_name = "sponsorships"
    model = SponsorshipDoc

    async def approved_totals(self, cause_id: ObjectId) -> ApprovedTotals:
        """Sum amount and tote quantity over approved sponsorships of a cause."""
        pipeline = [
            {"$match": {"cause": cause_id, "status": SPONSORSHIP_STATUS_APPROVED}},
            {
                "$group": {
                    "_id": None,
                    "total_amount": {"$sum": {"$ifNull": ["$total_amount", 0]}},
                    "total_totes": {"$sum": {"$ifNull": ["$tote_quantity", 0]}},
                }
            },
        ]
        cursor = await self._col.aggregate(pipeline)
        rows = await cursor.to_list(length=1)
        if not rows:
            return ApprovedTotals(total_amount=0, total_totes=0)
        return ApprovedTotals(
            total_amount=rows[0]["total_amount"],
            total_totes=int(rows[0]["total_totes"]),
        )

    async def list_by_cause(self, cause_id: ObjectId) -> list[SponsorshipDoc]:
        return await self.find_many({"cause": cause_id}, sort=[("created_at", -1)])

    async def list_pending(self) -> list[SponsorshipDoc]:
        return await self.find_many(
            {"status": SPONSORSHIP_STATUS_PENDING}, sort=[("created_at", -1)]
        )

    async def attach_distribution(
        self, sponsorship_id: ObjectId, distribution_id: ObjectId, *, session=None
    ) -> None:
        await self._col.update_one(
            {"_id": sponsorship_id},
            {
                "$set": {
                    "physical_distribution": distribution_id,
                    "distribution_type": DISTRIBUTION_TYPE_PHYSICAL,
                    "updated_at": utcnow(),
                }
            },
            session=session,
        )

    async def detach_distribution(
        self, sponsorship_id: ObjectId, *, session=None
    ) -> None:
        await self._col.update_one(
            {"_id": sponsorship_id},
            {"$unset": {"physical_distribution": ""}, "$set": {"updated_at": utcnow()}},
            session=session,
        )
