"""
Distribution location registry endpoints.

GET    /api/distribution-locations             — list (type, isActive, city filters)
GET    /api/distribution-locations/types       — allowed location types
GET    /api/distribution-locations/type/{type} — active locations of one type
GET    /api/distribution-locations/{id}        — one location
POST   /api/distribution-locations             — create (admin)
PUT    /api/distribution-locations/{id}        — update (admin)
DELETE /api/distribution-locations/{id}        — delete (admin)
POST   /api/distribution-locations/reconcile   — rebuild totesCount from allocations (admin)
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies import get_distribution_allocator, get_location_service, require_admin
from schemas.dto.requests.distribution import (
    CreateLocationRequest,
    UpdateLocationRequest,
)
from schemas.dto.responses.common import MessageResponse
from schemas.dto.responses.distribution import (
    LocationCountCorrection,
    LocationListResponse,
    LocationResponse,
    ReconcileResponse,
)
from schemas.models.user import UserDoc
from services.distribution_service import DistributionAllocator
from services.location_service import LocationService

router = APIRouter(prefix="/api/distribution-locations", tags=["distribution-locations"])


def _listing(rows) -> LocationListResponse:
    return LocationListResponse(
        count=len(rows), data=[LocationResponse.from_doc(r) for r in rows]
    )


@router.get("")
async def list_locations(
    type: Optional[str] = None,
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    city: Optional[str] = None,
    locations: LocationService = Depends(get_location_service),
) -> LocationListResponse:
    rows = await locations.list_locations(
        location_type=type, is_active=is_active, city=city
    )
    return _listing(rows)


@router.get("/types")
async def location_types() -> list[str]:
    return LocationService.location_types()


@router.get("/type/{location_type}")
async def list_locations_by_type(
    location_type: str, locations: LocationService = Depends(get_location_service)
) -> LocationListResponse:
    return _listing(await locations.list_by_type(location_type))


@router.post("/reconcile")
async def reconcile_location_counts(
    admin: UserDoc = Depends(require_admin),
    allocator: DistributionAllocator = Depends(get_distribution_allocator),
) -> ReconcileResponse:
    checked, corrections = await allocator.reconcile_location_counts()
    return ReconcileResponse(
        checked=checked,
        corrections=[LocationCountCorrection(**c) for c in corrections],
    )


@router.get("/{location_id}")
async def get_location(
    location_id: str, locations: LocationService = Depends(get_location_service)
) -> LocationResponse:
    return LocationResponse.from_doc(await locations.get_location(location_id))


@router.post("", status_code=201)
async def create_location(
    body: CreateLocationRequest,
    admin: UserDoc = Depends(require_admin),
    locations: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return LocationResponse.from_doc(await locations.create_location(body))


@router.put("/{location_id}")
async def update_location(
    location_id: str,
    body: UpdateLocationRequest,
    admin: UserDoc = Depends(require_admin),
    locations: LocationService = Depends(get_location_service),
) -> LocationResponse:
    return LocationResponse.from_doc(
        await locations.update_location(location_id, body)
    )


@router.delete("/{location_id}")
async def delete_location(
    location_id: str,
    admin: UserDoc = Depends(require_admin),
    locations: LocationService = Depends(get_location_service),
) -> MessageResponse:
    await locations.delete_location(location_id)
    return MessageResponse(message="Distribution location deleted successfully")
