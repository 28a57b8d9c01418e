"""
Cause funding aggregator.

A cause's funded amount and tote capacity both come from its approved
sponsorships. Every write path re-derives them from the sponsorship rows
instead of adjusting them incrementally, so concurrent or retried writes
converge once the last one lands.
"""

from __future__ import annotations

from bson import ObjectId

from repositories.cause_repository import CauseRepository
from repositories.sponsorship_repository import SponsorshipRepository
from shared.logging import get_logger

log = get_logger(__name__)


class FundingAggregator:
    def __init__(
        self, cause_repo: CauseRepository, sponsorship_repo: SponsorshipRepository
    ) -> None:
        self._causes = cause_repo
        self._sponsorships = sponsorship_repo

    async def recompute_current_amount(self, cause_id: ObjectId) -> float:
        """Rewrite the cause's ``current_amount`` from approved sponsorships."""
        totals = await self._sponsorships.approved_totals(cause_id)
        matched = await self._causes.set_current_amount(cause_id, totals.total_amount)
        if not matched:
            log.warning("cause_amount_recompute_skipped", cause_id=str(cause_id))
        else:
            log.info(
                "cause_amount_recomputed",
                cause_id=str(cause_id),
                current_amount=totals.total_amount,
            )
        return totals.total_amount

    async def total_totes(self, cause_id: ObjectId) -> int:
        """Sum of tote_quantity over approved sponsorships. Never cached."""
        totals = await self._sponsorships.approved_totals(cause_id)
        return totals.total_totes
