"""
Claim lifecycle.

Claimers submit pending claims and confirm their email with an OTP; admins
drive the status machine (see schemas.models.claim.CLAIM_TRANSITIONS).
Submitting or confirming a claim never changes whether it counts against
the cause's tote pool; only the admin transitions do.
"""

from __future__ import annotations

from datetime import datetime, time, timezone
from math import ceil
from typing import Optional

from errors import NotFoundError, ValidationError
from repositories.cause_repository import CauseRepository
from repositories.claim_repository import ClaimRepository
from schemas.dto.requests.claim import CreateClaimRequest
from schemas.models.claim import (
    CLAIM_STATUS_DELIVERED,
    CLAIM_STATUS_PENDING,
    CLAIM_STATUS_SHIPPED,
    CLAIM_STATUSES,
    CLAIM_TRANSITIONS,
    COUNTED_CLAIM_STATUSES,
    ClaimDoc,
)
from services.availability_service import AvailabilityService
from services.otp_service import OTPService
from shared.datetime_utils import utcnow
from shared.logging import get_logger
from shared.validators import normalize_email, parse_object_id

log = get_logger(__name__)


class ClaimService:
    def __init__(
        self,
        claim_repo: ClaimRepository,
        cause_repo: CauseRepository,
        availability: AvailabilityService,
        otp_service: OTPService,
        *,
        enforce_capacity_on_verify: bool = True,
    ) -> None:
        self._claims = claim_repo
        self._causes = cause_repo
        self._availability = availability
        self._otp = otp_service
        self._enforce_capacity = enforce_capacity_on_verify

    async def get_claim(self, claim_id: str) -> ClaimDoc:
        claim = await self._claims.find_by_id(parse_object_id(claim_id, "claim"))
        if claim is None:
            raise NotFoundError("Claim not found")
        return claim

    async def create_claim(self, req: CreateClaimRequest) -> ClaimDoc:
        cause_id = parse_object_id(req.cause_id, "cause")
        cause = await self._causes.find_by_id(cause_id)
        if cause is None:
            raise NotFoundError("Cause not found")

        availability = await self._availability.get_cause_availability(cause_id)
        if availability.available_totes <= 0:
            raise ValidationError(
                "No totes are available for this cause",
                field="causeId",
                details=availability.to_dict(),
            )

        claim = ClaimDoc(
            cause_id=cause_id,
            cause_title=req.cause_title or cause.title,
            full_name=req.full_name,
            email=normalize_email(req.email),
            phone=req.phone,
            purpose=req.purpose,
            address=req.address,
            city=req.city,
            state=req.state,
            zip_code=req.zip_code,
            status=CLAIM_STATUS_PENDING,
            email_verified=False,
        )
        claim = await self._claims.insert(claim)
        log.info("claim_created", claim_id=str(claim.id), cause_id=str(cause_id))
        return claim

    async def confirm_claim_email(self, claim_id: str, code: str) -> ClaimDoc:
        """Verify *code* for the claim's email and flip ``email_verified``.

        The claim status is left untouched.
        """
        claim = await self.get_claim(claim_id)
        result = await self._otp.verify_code(claim.email, code)
        result.raise_for_failure()

        updated = await self._claims.update_fields(claim.id, {"email_verified": True})
        if updated is None:
            raise NotFoundError("Claim not found")
        log.info("claim_email_verified", claim_id=str(claim.id))
        return updated

    async def update_status(self, claim_id: str, status: str) -> ClaimDoc:
        """Apply an admin status transition, stamping shipping/delivery dates."""
        if status not in CLAIM_STATUSES:
            raise ValidationError(
                f"Invalid claim status: {status!r}",
                field="status",
                details={"allowed": sorted(CLAIM_STATUSES)},
            )

        claim = await self.get_claim(claim_id)
        allowed = CLAIM_TRANSITIONS[claim.status]
        if status not in allowed:
            raise ValidationError(
                f"Cannot change claim status from {claim.status} to {status}",
                field="status",
                details={"from": claim.status, "allowed": sorted(allowed)},
            )

        enters_pool = (
            status in COUNTED_CLAIM_STATUSES
            and claim.status not in COUNTED_CLAIM_STATUSES
        )
        if enters_pool and self._enforce_capacity:
            availability = await self._availability.get_cause_availability(
                claim.cause_id
            )
            if availability.available_totes <= 0:
                raise ValidationError(
                    "No totes left for this cause; the claim cannot be verified",
                    field="status",
                    details=availability.to_dict(),
                )

        fields: dict = {"status": status}
        now = utcnow()
        if status == CLAIM_STATUS_SHIPPED:
            fields["shipping_date"] = now
        elif status == CLAIM_STATUS_DELIVERED:
            fields["delivery_date"] = now

        updated = await self._claims.update_fields(claim.id, fields)
        if updated is None:
            raise NotFoundError("Claim not found")

        log.info(
            "claim_status_updated",
            claim_id=str(claim.id),
            cause_id=str(claim.cause_id),
            from_status=claim.status,
            to_status=status,
        )
        return updated

    async def list_recent(
        self, page: int = 1, limit: int = 10
    ) -> tuple[list[ClaimDoc], dict]:
        page = max(page, 1)
        limit = max(limit, 1)
        claims = await self._claims.list_recent(skip=(page - 1) * limit, limit=limit)
        total = await self._claims.count({})
        pagination = {"total": total, "page": page, "pages": ceil(total / limit)}
        return claims, pagination

    async def stats(self, now: Optional[datetime] = None) -> dict:
        now = now or utcnow()
        start_of_day = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
        by_status = await self._claims.count_by_status()
        total = await self._claims.count({})
        today = await self._claims.count_created_since(start_of_day)
        return {"by_status": by_status, "total": total, "today": today}
