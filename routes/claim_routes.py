"""
Claim endpoints.

POST  /api/claims                   — submit a claim (public, 201)
GET   /api/claims/recent            — paginated recent claims (admin)
GET   /api/claims/stats             — counts by status, total, today (admin)
GET   /api/claims/{id}              — one claim (admin)
PATCH /api/claims/{id}/status       — state machine transition (admin)
POST  /api/claims/{id}/verify-email — confirm the claimer's email with an OTP
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from dependencies import get_claim_service, require_admin
from schemas.dto.requests.claim import (
    CreateClaimRequest,
    UpdateClaimStatusRequest,
    VerifyClaimEmailRequest,
)
from schemas.dto.responses.claim import (
    ClaimListResponse,
    ClaimResponse,
    ClaimStatsResponse,
    ClaimSummary,
)
from schemas.dto.responses.common import PaginationMeta
from schemas.models.user import UserDoc
from services.claim_service import ClaimService

router = APIRouter(prefix="/api/claims", tags=["claims"])


@router.post("", status_code=201)
async def create_claim(
    body: CreateClaimRequest, claims: ClaimService = Depends(get_claim_service)
) -> ClaimResponse:
    claim = await claims.create_claim(body)
    return ClaimResponse.from_doc(claim)


@router.get("/recent")
async def recent_claims(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    admin: UserDoc = Depends(require_admin),
    claims: ClaimService = Depends(get_claim_service),
) -> ClaimListResponse:
    rows, pagination = await claims.list_recent(page=page, limit=limit)
    return ClaimListResponse(
        claims=[ClaimSummary.from_doc(c) for c in rows],
        pagination=PaginationMeta(**pagination),
    )


@router.get("/stats")
async def claim_stats(
    admin: UserDoc = Depends(require_admin),
    claims: ClaimService = Depends(get_claim_service),
) -> ClaimStatsResponse:
    return ClaimStatsResponse(**await claims.stats())


@router.get("/{claim_id}")
async def get_claim(
    claim_id: str,
    admin: UserDoc = Depends(require_admin),
    claims: ClaimService = Depends(get_claim_service),
) -> ClaimResponse:
    return ClaimResponse.from_doc(await claims.get_claim(claim_id))


@router.patch("/{claim_id}/status")
async def update_claim_status(
    claim_id: str,
    body: UpdateClaimStatusRequest,
    admin: UserDoc = Depends(require_admin),
    claims: ClaimService = Depends(get_claim_service),
) -> ClaimResponse:
    claim = await claims.update_status(claim_id, body.status)
    return ClaimResponse.from_doc(claim)


@router.post("/{claim_id}/verify-email")
async def verify_claim_email(
    claim_id: str,
    body: VerifyClaimEmailRequest,
    claims: ClaimService = Depends(get_claim_service),
) -> ClaimResponse:
    claim = await claims.confirm_claim_email(claim_id, body.otp)
    return ClaimResponse.from_doc(claim)
