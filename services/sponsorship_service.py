"""
Sponsorship lifecycle.

Every write re-runs the funding aggregator for the owning cause, so
``current_amount`` and the tote pool follow approvals without incremental
bookkeeping.
"""

from __future__ import annotations

from typing import Optional

from errors import NotFoundError
from repositories.cause_repository import CauseRepository
from repositories.distribution_repository import PhysicalDistributionRepository
from repositories.sponsorship_repository import SponsorshipRepository
from schemas.dto.requests.sponsorship import CreateSponsorshipRequest
from schemas.models.sponsorship import (
    SPONSORSHIP_STATUS_APPROVED,
    SPONSORSHIP_STATUS_PENDING,
    SPONSORSHIP_STATUS_REJECTED,
    SponsorshipDoc,
)
from schemas.models.user import UserDoc
from services.distribution_service import DistributionAllocator
from services.funding_service import FundingAggregator
from shared.datetime_utils import utcnow
from shared.logging import get_logger
from shared.validators import normalize_email, parse_object_id

log = get_logger(__name__)


class SponsorshipService:
    def __init__(
        self,
        sponsorship_repo: SponsorshipRepository,
        cause_repo: CauseRepository,
        distribution_repo: PhysicalDistributionRepository,
        funding: FundingAggregator,
        allocator: DistributionAllocator,
    ) -> None:
        self._sponsorships = sponsorship_repo
        self._causes = cause_repo
        self._distributions = distribution_repo
        self._funding = funding
        self._allocator = allocator

    async def get_sponsorship(self, sponsorship_id: str) -> SponsorshipDoc:
        sponsorship = await self._sponsorships.find_by_id(
            parse_object_id(sponsorship_id, "sponsorship")
        )
        if sponsorship is None:
            raise NotFoundError("Sponsorship not found")
        return sponsorship

    async def list_pending(self) -> list[SponsorshipDoc]:
        return await self._sponsorships.list_pending()

    async def create_sponsorship(self, req: CreateSponsorshipRequest) -> SponsorshipDoc:
        cause_id = parse_object_id(req.cause, "cause")
        if await self._causes.find_by_id(cause_id) is None:
            raise NotFoundError("Cause not found")

        data = req.model_dump(exclude={"cause", "total_amount"})
        data["email"] = normalize_email(req.email)
        sponsorship = SponsorshipDoc(
            **data,
            cause=cause_id,
            total_amount=req.total_amount or 0,
            # Public submissions always start pending
            status=SPONSORSHIP_STATUS_PENDING,
        )
        sponsorship = await self._sponsorships.insert(sponsorship)
        log.info(
            "sponsorship_created",
            sponsorship_id=str(sponsorship.id),
            cause_id=str(cause_id),
            tote_quantity=sponsorship.tote_quantity,
        )
        await self._funding.recompute_current_amount(cause_id)
        return sponsorship

    async def _set_status(
        self, sponsorship_id: str, fields: dict
    ) -> SponsorshipDoc:
        sponsorship = await self.get_sponsorship(sponsorship_id)
        updated = await self._sponsorships.update_fields(sponsorship.id, fields)
        if updated is None:
            raise NotFoundError("Sponsorship not found")
        log.info(
            "sponsorship_status_updated",
            sponsorship_id=str(sponsorship.id),
            cause_id=str(sponsorship.cause),
            from_status=sponsorship.status,
            to_status=updated.status,
        )
        await self._funding.recompute_current_amount(updated.cause)
        return updated

    async def approve(self, sponsorship_id: str, actor: UserDoc) -> SponsorshipDoc:
        return await self._set_status(
            sponsorship_id,
            {
                "status": SPONSORSHIP_STATUS_APPROVED,
                "approved_by": actor.id,
                "approved_at": utcnow(),
                "rejection_reason": None,
            },
        )

    async def reject(
        self, sponsorship_id: str, reason: Optional[str] = None
    ) -> SponsorshipDoc:
        return await self._set_status(
            sponsorship_id,
            {"status": SPONSORSHIP_STATUS_REJECTED, "rejection_reason": reason},
        )

    async def delete_sponsorship(self, sponsorship_id: str) -> None:
        """Delete a sponsorship, releasing its physical distribution first."""
        sponsorship = await self.get_sponsorship(sponsorship_id)

        distribution = await self._distributions.find_by_sponsorship(sponsorship.id)
        if distribution is not None:
            await self._allocator.delete_distribution(str(distribution.id))

        await self._sponsorships.delete_by_id(sponsorship.id)
        log.info(
            "sponsorship_deleted",
            sponsorship_id=str(sponsorship.id),
            cause_id=str(sponsorship.cause),
            released_distribution=distribution is not None,
        )
        await self._funding.recompute_current_amount(sponsorship.cause)
