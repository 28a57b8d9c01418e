"""
Response DTOs for claim endpoints.

ClaimResponse      — full claim document
ClaimSummary       — row in the recent-claims admin list
ClaimListResponse  — GET /api/claims/recent
ClaimStatsResponse — GET /api/claims/stats
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.dto.base import CamelModel, DocResponse
from schemas.dto.responses.common import PaginationMeta


class ClaimResponse(DocResponse):
    id: str = Field(alias="_id")
    cause_id: str
    cause_title: str
    full_name: str
    email: str
    phone: str
    purpose: str
    address: str
    city: str
    state: str
    zip_code: str
    status: str
    email_verified: bool
    shipping_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClaimSummary(DocResponse):
    id: str = Field(alias="_id")
    cause_title: str
    full_name: str
    email: str
    status: str
    created_at: Optional[datetime] = None


class ClaimListResponse(CamelModel):
    claims: list[ClaimSummary]
    pagination: PaginationMeta


class ClaimStatsResponse(CamelModel):
    by_status: dict[str, int]
    total: int
    today: int
