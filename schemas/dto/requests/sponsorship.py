"""
Request DTOs for sponsorship endpoints.

CreateSponsorshipRequest — POST  /api/sponsorships
RejectSponsorshipRequest — PATCH /api/sponsorships/{id}/reject
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from schemas.dto.base import CamelModel


class DistributionPointRequest(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    totes_count: Optional[int] = Field(default=None, ge=0)


class DemographicsRequest(CamelModel):
    age_groups: list[str] = []
    income: Optional[str] = None
    education: Optional[str] = None
    other: Optional[str] = None


class CreateSponsorshipRequest(CamelModel):
    """Public sponsorship submission. Status is always forced to pending.

    ``total_amount`` defaults to ``tote_quantity * unit_price`` when omitted.
    """

    cause: str
    organization_name: str = Field(min_length=1)
    contact_name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    tote_quantity: int = Field(default=50, ge=1)
    unit_price: float = Field(default=10, ge=0)
    total_amount: Optional[float] = Field(default=None, ge=0)
    logo_url: str = ""
    message: str = ""
    distribution_type: Literal["online", "physical"] = "online"
    distribution_points: list[DistributionPointRequest] = []
    distribution_start_date: Optional[datetime] = None
    distribution_end_date: Optional[datetime] = None
    demographics: Optional[DemographicsRequest] = None


class RejectSponsorshipRequest(CamelModel):
    reason: Optional[str] = None
