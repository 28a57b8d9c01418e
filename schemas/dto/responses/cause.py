"""
Response DTOs for cause endpoints.

CauseResponse       — cause document as stored
CauseDetailResponse — GET /api/causes/{id}; adds the computed tote
                      availability (never stored) and, on request, the
                      cause's sponsorships
AvailabilityResponse — GET /api/causes/{id}/availability
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.dto.base import CamelModel, DocResponse
from schemas.dto.responses.sponsorship import SponsorshipSummary


class CauseResponse(DocResponse):
    id: str = Field(alias="_id")
    title: str
    description: str
    image_url: str
    target_amount: float
    current_amount: float
    creator: str
    status: str
    start_date: Optional[datetime] = None
    location: Optional[str] = None
    category: str
    is_online: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AvailabilityResponse(CamelModel):
    total_totes: int
    claimed_totes: int
    available_totes: int


class CauseDetailResponse(CauseResponse):
    total_totes: int
    claimed_totes: int
    available_totes: int
    sponsorships: Optional[list[SponsorshipSummary]] = None


class CauseStatusResponse(CamelModel):
    message: str
    cause: CauseResponse
