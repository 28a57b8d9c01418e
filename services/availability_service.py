"""
Availability view composer.

Combines the funded tote total with the number of claims that consume a
tote. Read-only; runs fresh for every cause detail fetch.
"""

from __future__ import annotations

from dataclasses import dataclass

from bson import ObjectId

from repositories.claim_repository import ClaimRepository
from services.funding_service import FundingAggregator


@dataclass(frozen=True)
class CauseAvailability:
    total_totes: int
    claimed_totes: int

    @property
    def available_totes(self) -> int:
        # Floored at zero even if claims were verified past capacity
        return max(0, self.total_totes - self.claimed_totes)

    def to_dict(self) -> dict:
        return {
            "totalTotes": self.total_totes,
            "claimedTotes": self.claimed_totes,
            "availableTotes": self.available_totes,
        }


class AvailabilityService:
    def __init__(
        self, funding: FundingAggregator, claim_repo: ClaimRepository
    ) -> None:
        self._funding = funding
        self._claims = claim_repo

    async def get_cause_availability(self, cause_id: ObjectId) -> CauseAvailability:
        total = await self._funding.total_totes(cause_id)
        claimed = await self._claims.count_claimed(cause_id)
        return CauseAvailability(total_totes=total, claimed_totes=claimed)
