"""
Cause management.

Causes are created by any signed-in user; an admin's cause is approved on
creation, everyone else's waits for review. Funding (current_amount) and
tote availability are derived elsewhere and never written from here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from errors import ForbiddenError, NotFoundError, ValidationError
from repositories.cause_repository import CauseRepository
from repositories.sponsorship_repository import SponsorshipRepository
from schemas.dto.requests.cause import CreateCauseRequest, UpdateCauseRequest
from schemas.models.cause import (
    CAUSE_STATUS_APPROVED,
    CAUSE_STATUS_PENDING,
    CAUSE_STATUSES,
    CauseDoc,
)
from schemas.models.sponsorship import SponsorshipDoc
from schemas.models.user import UserDoc
from services.availability_service import AvailabilityService, CauseAvailability
from shared.logging import get_logger
from shared.validators import parse_object_id

log = get_logger(__name__)


@dataclass
class CauseDetail:
    cause: CauseDoc
    availability: CauseAvailability
    sponsorships: Optional[list[SponsorshipDoc]] = None


def _check_status(status: str) -> None:
    if status not in CAUSE_STATUSES:
        raise ValidationError(
            "Invalid status",
            field="status",
            details={"allowed": sorted(CAUSE_STATUSES)},
        )


class CauseService:
    def __init__(
        self,
        cause_repo: CauseRepository,
        sponsorship_repo: SponsorshipRepository,
        availability: AvailabilityService,
    ) -> None:
        self._causes = cause_repo
        self._sponsorships = sponsorship_repo
        self._availability = availability

    async def _load(self, cause_id: str) -> CauseDoc:
        cause = await self._causes.find_by_id(parse_object_id(cause_id, "cause"))
        if cause is None:
            raise NotFoundError("Cause not found")
        return cause

    @staticmethod
    def _ensure_can_modify(cause: CauseDoc, actor: UserDoc, action: str) -> None:
        if actor.is_admin or cause.creator == actor.id:
            return
        raise ForbiddenError(f"Not authorized to {action} this cause")

    async def create_cause(self, req: CreateCauseRequest, actor: UserDoc) -> CauseDoc:
        status = CAUSE_STATUS_APPROVED if actor.is_admin else CAUSE_STATUS_PENDING
        cause = CauseDoc(
            **req.model_dump(),
            creator=actor.id,
            status=status,
            current_amount=0,
        )
        cause = await self._causes.insert(cause)
        log.info(
            "cause_created",
            cause_id=str(cause.id),
            creator_id=str(actor.id),
            status=status,
        )
        return cause

    async def get_cause_detail(
        self, cause_id: str, *, include_sponsorships: bool = False
    ) -> CauseDetail:
        cause = await self._load(cause_id)
        availability = await self._availability.get_cause_availability(cause.id)
        sponsorships = None
        if include_sponsorships:
            sponsorships = await self._sponsorships.list_by_cause(cause.id)
        return CauseDetail(
            cause=cause, availability=availability, sponsorships=sponsorships
        )

    async def get_availability(self, cause_id: str) -> CauseAvailability:
        cause = await self._load(cause_id)
        return await self._availability.get_cause_availability(cause.id)

    async def list_causes(
        self,
        *,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[CauseDoc]:
        return await self._causes.list_causes(
            status=status, category=category, search=search
        )

    async def list_causes_by_user(self, user_id: str) -> list[CauseDoc]:
        return await self._causes.list_by_creator(parse_object_id(user_id, "user"))

    async def update_cause(
        self, cause_id: str, req: UpdateCauseRequest, actor: UserDoc
    ) -> CauseDoc:
        cause = await self._load(cause_id)
        self._ensure_can_modify(cause, actor, "update")

        fields = req.model_dump(exclude_unset=True, exclude={"status"})
        # Status changes from non-admins are dropped, not rejected
        if req.status is not None and actor.is_admin:
            _check_status(req.status)
            fields["status"] = req.status
        if not fields:
            return cause

        updated = await self._causes.update_fields(cause.id, fields)
        if updated is None:
            raise NotFoundError("Cause not found")
        log.info("cause_updated", cause_id=str(cause.id), fields=sorted(fields))
        return updated

    async def update_cause_status(self, cause_id: str, status: str) -> CauseDoc:
        _check_status(status)
        cause = await self._load(cause_id)
        updated = await self._causes.update_fields(cause.id, {"status": status})
        if updated is None:
            raise NotFoundError("Cause not found")
        log.info(
            "cause_status_updated",
            cause_id=str(cause.id),
            from_status=cause.status,
            to_status=status,
        )
        return updated

    async def delete_cause(self, cause_id: str, actor: UserDoc) -> None:
        cause = await self._load(cause_id)
        self._ensure_can_modify(cause, actor, "delete")
        await self._causes.delete_by_id(cause.id)
        log.info("cause_deleted", cause_id=str(cause.id), actor_id=str(actor.id))
