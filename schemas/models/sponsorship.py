"""
Sponsorship document model.

Maps to the `sponsorships` MongoDB collection.

Only approved sponsorships contribute to a cause's funded amount and tote
capacity. physical_distribution is the back-reference to the single
PhysicalDistribution plan owned by this sponsorship, if one exists.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from schemas.models.base import MongoBaseModel, PyObjectId

SPONSORSHIP_STATUS_PENDING = "pending"
SPONSORSHIP_STATUS_APPROVED = "approved"
SPONSORSHIP_STATUS_REJECTED = "rejected"
SPONSORSHIP_STATUS_COMPLETED = "completed"
SPONSORSHIP_STATUS_FAILED = "failed"

SponsorshipStatus = Literal["pending", "approved", "rejected", "completed", "failed"]

DISTRIBUTION_TYPE_ONLINE = "online"
DISTRIBUTION_TYPE_PHYSICAL = "physical"

DistributionType = Literal["online", "physical"]


class DistributionPoint(BaseModel):
    """Legacy free-form distribution point embedded on a sponsorship."""

    name: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    totes_count: Optional[int] = None


class Demographics(BaseModel):
    age_groups: list[str] = []
    income: Optional[str] = None
    education: Optional[str] = None
    other: Optional[str] = None


class SponsorshipDoc(MongoBaseModel):
    """Document model for the `sponsorships` collection."""

    cause: PyObjectId
    organization_name: str
    contact_name: str
    email: str
    phone: str
    tote_quantity: int = Field(default=50, ge=1)
    unit_price: float = Field(default=10, ge=0)
    total_amount: float = Field(default=0, ge=0)
    logo_url: str = ""
    message: str = ""
    distribution_type: DistributionType = DISTRIBUTION_TYPE_ONLINE
    distribution_points: list[DistributionPoint] = []
    distribution_start_date: Optional[datetime] = None
    distribution_end_date: Optional[datetime] = None
    demographics: Optional[Demographics] = None
    status: SponsorshipStatus = SPONSORSHIP_STATUS_PENDING
    approved_by: Optional[PyObjectId] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    physical_distribution: Optional[PyObjectId] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _fill_total_amount(self) -> "SponsorshipDoc":
        # total_amount defaults to quantity x unit price when not supplied
        if not self.total_amount and self.tote_quantity and self.unit_price:
            self.total_amount = self.tote_quantity * self.unit_price
        return self
