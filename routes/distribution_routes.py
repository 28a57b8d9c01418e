"""
Physical distribution endpoints.

POST   /api/physical-distributions                                   — allocate a sponsorship's totes (signed in, 201)
GET    /api/physical-distributions                                   — list (admin)
GET    /api/physical-distributions/sponsorship/{sponsorship_id}      — plan for one sponsorship (signed in)
GET    /api/physical-distributions/{id}                              — one plan (signed in)
PUT    /api/physical-distributions/{id}                              — patch shipping/tracking, or reallocate (admin)
PATCH  /api/physical-distributions/{id}/locations/{location_id}/status — progress one location (admin)
DELETE /api/physical-distributions/{id}                              — release and delete (admin)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_current_user, get_distribution_allocator, require_admin
from schemas.dto.requests.distribution import (
    CreateDistributionRequest,
    UpdateDistributionRequest,
    UpdateLocationStatusRequest,
)
from schemas.dto.responses.common import MessageResponse
from schemas.dto.responses.distribution import DistributionResponse
from schemas.models.user import UserDoc
from services.distribution_service import DistributionAllocator

router = APIRouter(prefix="/api/physical-distributions", tags=["physical-distributions"])


@router.post("", status_code=201)
async def create_distribution(
    body: CreateDistributionRequest,
    user: UserDoc = Depends(get_current_user),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> DistributionResponse:
    return DistributionResponse.from_doc(await allocator.create_distribution(body))


@router.get("")
async def list_distributions(
    admin: UserDoc = Depends(require_admin),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> list[DistributionResponse]:
    rows = await allocator.list_distributions()
    return [DistributionResponse.from_doc(d) for d in rows]


@router.get("/sponsorship/{sponsorship_id}")
async def get_distribution_by_sponsorship(
    sponsorship_id: str,
    user: UserDoc = Depends(get_current_user),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> DistributionResponse:
    return DistributionResponse.from_doc(
        await allocator.get_by_sponsorship(sponsorship_id)
    )


@router.get("/{distribution_id}")
async def get_distribution(
    distribution_id: str,
    user: UserDoc = Depends(get_current_user),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> DistributionResponse:
    return DistributionResponse.from_doc(
        await allocator.get_distribution(distribution_id)
    )


@router.put("/{distribution_id}")
async def update_distribution(
    distribution_id: str,
    body: UpdateDistributionRequest,
    admin: UserDoc = Depends(require_admin),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> DistributionResponse:
    return DistributionResponse.from_doc(
        await allocator.update_distribution(distribution_id, body)
    )


@router.patch("/{distribution_id}/locations/{location_id}/status")
async def update_location_status(
    distribution_id: str,
    location_id: str,
    body: UpdateLocationStatusRequest,
    admin: UserDoc = Depends(require_admin),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> DistributionResponse:
    return DistributionResponse.from_doc(
        await allocator.update_location_status(distribution_id, location_id, body)
    )


@router.delete("/{distribution_id}")
async def delete_distribution(
    distribution_id: str,
    admin: UserDoc = Depends(require_admin),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> MessageResponse:
    await allocator.delete_distribution(distribution_id)
    return MessageResponse(message="Physical distribution deleted successfully")
