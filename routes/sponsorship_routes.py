"""
Sponsorship endpoints.

POST   /api/sponsorships              — public submission (always pending)
GET    /api/sponsorships/pending      — review queue (admin)
GET    /api/sponsorships/{id}         — one sponsorship (signed in)
PATCH  /api/sponsorships/{id}/approve — approve (admin)
PATCH  /api/sponsorships/{id}/reject  — reject with an optional reason (admin)
DELETE /api/sponsorships/{id}         — delete, releasing any distribution (admin)
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends

from dependencies import get_current_user, get_sponsorship_service, require_admin
from schemas.dto.requests.sponsorship import (
    CreateSponsorshipRequest,
    RejectSponsorshipRequest,
)
from schemas.dto.responses.common import MessageResponse
from schemas.dto.responses.sponsorship import SponsorshipResponse
from schemas.models.user import UserDoc
from services.sponsorship_service import SponsorshipService

router = APIRouter(prefix="/api/sponsorships", tags=["sponsorships"])


@router.post("", status_code=201)
async def create_sponsorship(
    body: CreateSponsorshipRequest,
    sponsorships: SponsorshipService = Depends(get_sponsorship_service),
) -> SponsorshipResponse:
    return SponsorshipResponse.from_doc(await sponsorships.create_sponsorship(body))


@router.get("/pending")
async def pending_sponsorships(
    admin: UserDoc = Depends(require_admin),
    sponsorships: SponsorshipService = Depends(get_sponsorship_service),
) -> list[SponsorshipResponse]:
    rows = await sponsorships.list_pending()
    return [SponsorshipResponse.from_doc(s) for s in rows]


@router.get("/{sponsorship_id}")
async def get_sponsorship(
    sponsorship_id: str,
    user: UserDoc = Depends(get_current_user),
    sponsorships: SponsorshipService = Depends(get_sponsorship_service),
) -> SponsorshipResponse:
    return SponsorshipResponse.from_doc(
        await sponsorships.get_sponsorship(sponsorship_id)
    )


@router.patch("/{sponsorship_id}/approve")
async def approve_sponsorship(
    sponsorship_id: str,
    admin: UserDoc = Depends(require_admin),
    sponsorships: SponsorshipService = Depends(get_sponsorship_service),
) -> SponsorshipResponse:
    return SponsorshipResponse.from_doc(
        await sponsorships.approve(sponsorship_id, admin)
    )


@router.patch("/{sponsorship_id}/reject")
async def reject_sponsorship(
    sponsorship_id: str,
    body: Optional[RejectSponsorshipRequest] = Body(default=None),
    admin: UserDoc = Depends(require_admin),
    sponsorships: SponsorshipService = Depends(get_sponsorship_service),
) -> SponsorshipResponse:
    reason = body.reason if body else None
    return SponsorshipResponse.from_doc(
        await sponsorships.reject(sponsorship_id, reason)
    )


@router.delete("/{sponsorship_id}")
async def delete_sponsorship(
    sponsorship_id: str,
    admin: UserDoc = Depends(require_admin),
    sponsorships: SponsorshipService = Depends(get_sponsorship_service),
) -> MessageResponse:
    await sponsorships.delete_sponsorship(sponsorship_id)
    return MessageResponse(message="Sponsorship deleted")
