"""
Physical distribution allocator.

Splits one approved sponsorship's totes across distribution locations and
keeps every location's cached ``totes_count`` in step with the allocations
that reference it.

Invariant: the quantities of a distribution's entries always sum to the
sponsorship's ``tote_quantity``.

Every write that touches more than one document (create, location-list
update, delete) runs in a single multi-document transaction, so a failure
part-way leaves neither a half-written plan nor drifted location counters.
``reconcile_location_counts`` re-derives the counters from the distribution
rows for anything that slipped past (manual edits, restored backups).
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from errors import ConflictError, NotFoundError, ValidationError
from repositories.distribution_repository import (
    DistributionLocationRepository,
    PhysicalDistributionRepository,
)
from repositories.sponsorship_repository import SponsorshipRepository
from repositories.transactions import run_in_transaction
from schemas.dto.requests.distribution import (
    CreateDistributionRequest,
    LocationAllocationRequest,
    UpdateDistributionRequest,
    UpdateLocationStatusRequest,
)
from schemas.models.distribution import (
    DISTRIBUTION_STATUS_COMPLETED,
    DISTRIBUTION_STATUS_IN_PROGRESS,
    DISTRIBUTION_STATUS_PENDING,
    DISTRIBUTION_STATUSES,
    LocationAllocation,
    PhysicalDistributionDoc,
)
from schemas.models.sponsorship import SPONSORSHIP_STATUS_APPROVED, SponsorshipDoc
from shared.logging import get_logger
from shared.validators import parse_object_id

log = get_logger(__name__)


def derive_distribution_status(
    entries: Iterable[LocationAllocation], current: str
) -> str:
    """Overall status from the per-location statuses.

    All completed → completed; otherwise any in progress → in_progress;
    otherwise the current status is kept as-is (it is not walked back to
    pending when entries revert).
    """
    statuses = [entry.status for entry in entries]
    if statuses and all(s == DISTRIBUTION_STATUS_COMPLETED for s in statuses):
        return DISTRIBUTION_STATUS_COMPLETED
    if any(s == DISTRIBUTION_STATUS_IN_PROGRESS for s in statuses):
        return DISTRIBUTION_STATUS_IN_PROGRESS
    return current


class DistributionAllocator:
    def __init__(
        self,
        distribution_repo: PhysicalDistributionRepository,
        location_repo: DistributionLocationRepository,
        sponsorship_repo: SponsorshipRepository,
        mongo_client: Any,
    ) -> None:
        self._distributions = distribution_repo
        self._locations = location_repo
        self._sponsorships = sponsorship_repo
        self._client = mongo_client

    # ── Reads ────────────────────────────────────────────────────────────────

    async def get_distribution(self, distribution_id: str) -> PhysicalDistributionDoc:
        distribution = await self._distributions.find_by_id(
            parse_object_id(distribution_id, "distribution")
        )
        if distribution is None:
            raise NotFoundError("Physical distribution not found")
        return distribution

    async def list_distributions(self) -> list[PhysicalDistributionDoc]:
        return await self._distributions.list_all()

    async def get_by_sponsorship(self, sponsorship_id: str) -> PhysicalDistributionDoc:
        distribution = await self._distributions.find_by_sponsorship(
            parse_object_id(sponsorship_id, "sponsorship")
        )
        if distribution is None:
            raise NotFoundError("Physical distribution not found for this sponsorship")
        return distribution

    # ── Validation helpers ───────────────────────────────────────────────────

    @staticmethod
    def _build_allocations(
        items: list[LocationAllocationRequest],
    ) -> list[LocationAllocation]:
        allocations = [
            LocationAllocation(
                location=parse_object_id(item.location, "location"),
                quantity=item.quantity,
                status=item.status or DISTRIBUTION_STATUS_PENDING,
                notes=item.notes,
            )
            for item in items
        ]
        repeated = [
            str(loc)
            for loc, n in Counter(a.location for a in allocations).items()
            if n > 1
        ]
        if repeated:
            raise ValidationError(
                "Each location may appear only once per distribution",
                field="distributionLocations",
                details={"duplicates": repeated},
            )
        return allocations

    @staticmethod
    def _check_conservation(
        allocations: list[LocationAllocation], sponsorship: SponsorshipDoc
    ) -> None:
        total = sum(a.quantity for a in allocations)
        if total != sponsorship.tote_quantity:
            raise ValidationError(
                f"Total distribution quantity ({total}) must match sponsorship "
                f"tote quantity ({sponsorship.tote_quantity})",
                field="distributionLocations",
                details={
                    "allocated": total,
                    "toteQuantity": sponsorship.tote_quantity,
                },
            )

    async def _check_locations_exist(
        self, allocations: list[LocationAllocation]
    ) -> None:
        wanted = [a.location for a in allocations]
        found = await self._locations.existing_ids(wanted)
        missing = [str(loc) for loc in wanted if loc not in found]
        if missing:
            raise ValidationError(
                "One or more distribution locations not found: " + ", ".join(missing),
                field="distributionLocations",
                details={"missing": missing},
            )

    async def _load_sponsorship(self, sponsorship_id: ObjectId) -> SponsorshipDoc:
        sponsorship = await self._sponsorships.find_by_id(sponsorship_id)
        if sponsorship is None:
            raise NotFoundError("Sponsorship not found")
        return sponsorship

    # ── Writes ───────────────────────────────────────────────────────────────

    async def create_distribution(
        self, req: CreateDistributionRequest
    ) -> PhysicalDistributionDoc:
        sponsorship = await self._load_sponsorship(
            parse_object_id(req.sponsorship_id, "sponsorship")
        )
        if sponsorship.status != SPONSORSHIP_STATUS_APPROVED:
            raise ValidationError(
                "Only approved sponsorships can be distributed",
                field="sponsorshipId",
                details={"status": sponsorship.status},
            )
        existing = sponsorship.physical_distribution or (
            await self._distributions.find_by_sponsorship(sponsorship.id)
        )
        if existing:
            raise ConflictError("This sponsorship already has a physical distribution")

        allocations = self._build_allocations(req.distribution_locations)
        self._check_conservation(allocations, sponsorship)
        await self._check_locations_exist(allocations)

        shipping = req.model_dump(
            exclude={"sponsorship_id", "distribution_locations"}
        )

        async def _create(session) -> PhysicalDistributionDoc:
            distribution = PhysicalDistributionDoc(
                sponsorship=sponsorship.id,
                distribution_locations=[a.model_copy() for a in allocations],
                status=DISTRIBUTION_STATUS_PENDING,
                **shipping,
            )
            distribution = await self._distributions.insert(
                distribution, session=session
            )
            await self._sponsorships.attach_distribution(
                sponsorship.id, distribution.id, session=session
            )
            for entry in allocations:
                await self._locations.increment_totes(
                    entry.location, entry.quantity, session=session
                )
            return distribution

        try:
            distribution = await run_in_transaction(self._client, _create)
        except DuplicateKeyError:
            # Lost a race with another create for the same sponsorship
            raise ConflictError("This sponsorship already has a physical distribution")
        log.info(
            "distribution_created",
            distribution_id=str(distribution.id),
            sponsorship_id=str(sponsorship.id),
            locations=len(allocations),
            totes=sponsorship.tote_quantity,
        )
        return distribution

    async def update_distribution(
        self, distribution_id: str, req: UpdateDistributionRequest
    ) -> PhysicalDistributionDoc:
        distribution = await self.get_distribution(distribution_id)
        fields = req.model_dump(exclude_unset=True, exclude={"distribution_locations"})

        if req.distribution_locations is None:
            if not fields:
                return distribution
            updated = await self._distributions.update_fields(distribution.id, fields)
            if updated is None:
                raise NotFoundError("Physical distribution not found")
            return updated

        sponsorship = await self._load_sponsorship(distribution.sponsorship)
        allocations = self._build_allocations(req.distribution_locations)
        # Conservation is checked against the sponsorship, not the old plan
        self._check_conservation(allocations, sponsorship)
        await self._check_locations_exist(allocations)

        fields["distribution_locations"] = [a.model_dump() for a in allocations]
        fields["status"] = derive_distribution_status(
            allocations, DISTRIBUTION_STATUS_PENDING
        )

        async def _replace(session) -> Optional[PhysicalDistributionDoc]:
            current = await self._distributions.find_by_id(
                distribution.id, session=session
            )
            if current is None:
                return None
            # Full release-then-allocate pass rather than a diff
            for entry in current.distribution_locations:
                await self._locations.increment_totes(
                    entry.location, -entry.quantity, session=session
                )
            for entry in allocations:
                await self._locations.increment_totes(
                    entry.location, entry.quantity, session=session
                )
            return await self._distributions.update_fields(
                distribution.id, fields, session=session
            )

        updated = await run_in_transaction(self._client, _replace)
        if updated is None:
            raise NotFoundError("Physical distribution not found")

        log.info(
            "distribution_reallocated",
            distribution_id=str(distribution.id),
            locations=len(allocations),
        )
        return updated

    async def update_location_status(
        self, distribution_id: str, location_id: str, req: UpdateLocationStatusRequest
    ) -> PhysicalDistributionDoc:
        if req.status not in DISTRIBUTION_STATUSES:
            raise ValidationError(
                "Invalid status value",
                field="status",
                details={"allowed": sorted(DISTRIBUTION_STATUSES)},
            )

        distribution_oid = parse_object_id(distribution_id, "distribution")
        location_oid = parse_object_id(location_id, "location")

        entry_fields: dict[str, Any] = {"status": req.status}
        if req.notes:
            entry_fields["notes"] = req.notes
        if req.distributed_date:
            entry_fields["distributed_date"] = req.distributed_date

        async def _progress(session) -> Optional[PhysicalDistributionDoc]:
            # Only the matched entry is written; sibling entries keep their stored state
            updated = await self._distributions.update_location_entry(
                distribution_oid, location_oid, entry_fields, session=session
            )
            if updated is None:
                return None
            new_status = derive_distribution_status(
                updated.distribution_locations, updated.status
            )
            if new_status == updated.status:
                return updated
            return await self._distributions.update_fields(
                updated.id, {"status": new_status}, session=session
            )

        updated = await run_in_transaction(self._client, _progress)
        if updated is None:
            # Raises the 404 for a missing distribution before the entry one
            await self.get_distribution(distribution_id)
            raise NotFoundError("Location not found in this distribution")

        log.info(
            "distribution_location_status_updated",
            distribution_id=str(updated.id),
            location_id=str(location_oid),
            location_status=req.status,
            distribution_status=updated.status,
        )
        return updated

    async def delete_distribution(self, distribution_id: str) -> None:
        distribution = await self.get_distribution(distribution_id)

        async def _delete(session) -> Optional[PhysicalDistributionDoc]:
            # Release what is stored now, not what was read before the session
            current = await self._distributions.find_by_id(
                distribution.id, session=session
            )
            if current is None:
                return None
            for entry in current.distribution_locations:
                await self._locations.increment_totes(
                    entry.location, -entry.quantity, session=session
                )
            await self._sponsorships.detach_distribution(
                current.sponsorship, session=session
            )
            await self._distributions.delete_by_id(current.id, session=session)
            return current

        deleted = await run_in_transaction(self._client, _delete)
        if deleted is None:
            raise NotFoundError("Physical distribution not found")
        log.info(
            "distribution_deleted",
            distribution_id=str(deleted.id),
            sponsorship_id=str(deleted.sponsorship),
            released=deleted.allocated_total,
        )

    async def reconcile_location_counts(self) -> tuple[int, list[dict]]:
        """Rewrite each location's ``totes_count`` from live allocations.

        Returns:
            ``(locations_checked, corrections)`` where each correction is
            ``{"location", "previous", "corrected"}``.
        """
        allocated = await self._distributions.allocated_by_location()
        locations = await self._locations.find_many({})
        corrections: list[dict] = []

        for location in locations:
            expected = allocated.get(location.id, 0)
            if location.totes_count == expected:
                continue
            await self._locations.set_totes_count(location.id, expected)
            corrections.append(
                {
                    "location": str(location.id),
                    "previous": location.totes_count,
                    "corrected": expected,
                }
            )

        log.info(
            "location_counts_reconciled",
            checked=len(locations),
            corrected=len(corrections),
        )
        return len(locations), corrections
