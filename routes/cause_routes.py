"""
Cause endpoints.

GET    /api/causes                      — list (status, category, search filters)
GET    /api/causes/user/{user_id}       — causes created by one user
GET    /api/causes/{id}                 — detail with tote availability;
                                          ?include=sponsorships adds sponsorship rows
GET    /api/causes/{id}/availability    — availability only
POST   /api/causes                      — create (signed in)
PUT    /api/causes/{id}                 — update (owner or admin)
PATCH  /api/causes/{id}/status          — set status (admin)
DELETE /api/causes/{id}                 — delete (owner or admin)
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies import get_cause_service, get_current_user, require_admin
from schemas.dto.requests.cause import (
    CreateCauseRequest,
    UpdateCauseRequest,
    UpdateCauseStatusRequest,
)
from schemas.dto.responses.cause import (
    AvailabilityResponse,
    CauseDetailResponse,
    CauseResponse,
    CauseStatusResponse,
)
from schemas.dto.responses.common import MessageResponse
from schemas.dto.responses.sponsorship import SponsorshipSummary
from schemas.models.user import UserDoc
from services.cause_service import CauseService

router = APIRouter(prefix="/api/causes", tags=["causes"])


@router.get("")
async def list_causes(
    status: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    causes: CauseService = Depends(get_cause_service),
) -> list[CauseResponse]:
    rows = await causes.list_causes(status=status, category=category, search=search)
    return [CauseResponse.from_doc(c) for c in rows]


@router.get("/user/{user_id}")
async def list_user_causes(
    user_id: str, causes: CauseService = Depends(get_cause_service)
) -> list[CauseResponse]:
    rows = await causes.list_causes_by_user(user_id)
    return [CauseResponse.from_doc(c) for c in rows]


@router.get("/{cause_id}")
async def get_cause(
    cause_id: str,
    include: Optional[str] = Query(default=None),
    causes: CauseService = Depends(get_cause_service),
) -> CauseDetailResponse:
    include_sponsorships = "sponsorships" in (include or "").split(",")
    detail = await causes.get_cause_detail(
        cause_id, include_sponsorships=include_sponsorships
    )
    sponsorships = None
    if detail.sponsorships is not None:
        sponsorships = [SponsorshipSummary.from_doc(s) for s in detail.sponsorships]
    return CauseDetailResponse.from_doc(
        detail.cause,
        total_totes=detail.availability.total_totes,
        claimed_totes=detail.availability.claimed_totes,
        available_totes=detail.availability.available_totes,
        sponsorships=sponsorships,
    )


@router.get("/{cause_id}/availability")
async def get_availability(
    cause_id: str, causes: CauseService = Depends(get_cause_service)
) -> AvailabilityResponse:
    availability = await causes.get_availability(cause_id)
    return AvailabilityResponse(
        total_totes=availability.total_totes,
        claimed_totes=availability.claimed_totes,
        available_totes=availability.available_totes,
    )


@router.post("", status_code=201)
async def create_cause(
    body: CreateCauseRequest,
    user: UserDoc = Depends(get_current_user),
    causes: CauseService = Depends(get_cause_service),
) -> CauseResponse:
    return CauseResponse.from_doc(await causes.create_cause(body, user))


@router.put("/{cause_id}")
async def update_cause(
    cause_id: str,
    body: UpdateCauseRequest,
    user: UserDoc = Depends(get_current_user),
    causes: CauseService = Depends(get_cause_service),
) -> CauseResponse:
    return CauseResponse.from_doc(await causes.update_cause(cause_id, body, user))


@router.patch("/{cause_id}/status")
async def update_cause_status(
    cause_id: str,
    body: UpdateCauseStatusRequest,
    admin: UserDoc = Depends(require_admin),
    causes: CauseService = Depends(get_cause_service),
) -> CauseStatusResponse:
    cause = await causes.update_cause_status(cause_id, body.status)
    return CauseStatusResponse(
        message=f"Cause {cause.status} successfully",
        cause=CauseResponse.from_doc(cause),
    )


@router.delete("/{cause_id}")
async def delete_cause(
    cause_id: str,
    user: UserDoc = Depends(get_current_user),
    causes: CauseService = Depends(get_cause_service),
) -> MessageResponse:
    await causes.delete_cause(cause_id, user)
    return MessageResponse(message="Cause removed")
