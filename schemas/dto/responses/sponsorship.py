"""
Response DTOs for sponsorship endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from schemas.dto.base import DocResponse


class SponsorshipResponse(DocResponse):
    id: str = Field(alias="_id")
    cause: str
    organization_name: str
    contact_name: str
    email: str
    phone: str
    tote_quantity: int
    unit_price: float
    total_amount: float
    logo_url: str
    message: str
    distribution_type: str
    distribution_points: list[dict[str, Any]] = []
    distribution_start_date: Optional[datetime] = None
    distribution_end_date: Optional[datetime] = None
    demographics: Optional[dict[str, Any]] = None
    status: str
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    physical_distribution: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SponsorshipSummary(DocResponse):
    """Sponsorship row embedded in a cause detail response."""

    id: str = Field(alias="_id")
    status: str
    amount: float
    tote_quantity: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_doc(cls, doc: Any, **extra: Any):
        return super().from_doc(doc, amount=doc.total_amount, **extra)
