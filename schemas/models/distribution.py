"""
Distribution document models.

DistributionLocationDoc  → distribution-locations
PhysicalDistributionDoc  → physical-distributions

A PhysicalDistribution splits one sponsorship's totes across locations. The
sum of its entry quantities always equals the sponsorship's tote_quantity.
DistributionLocationDoc.totes_count is a cached running total of the totes
allocated to that location by all distributions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from schemas.models.base import MongoBaseModel, PyObjectId

LOCATION_TYPE_MALL = "mall"
LOCATION_TYPE_METRO_STATION = "metro_station"
LOCATION_TYPE_AIRPORT = "airport"
LOCATION_TYPE_SCHOOL = "school"
LOCATION_TYPE_OTHER = "other"

LocationType = Literal["mall", "metro_station", "airport", "school", "other"]
LOCATION_TYPES = (
    LOCATION_TYPE_MALL,
    LOCATION_TYPE_METRO_STATION,
    LOCATION_TYPE_AIRPORT,
    LOCATION_TYPE_SCHOOL,
    LOCATION_TYPE_OTHER,
)

DISTRIBUTION_STATUS_PENDING = "pending"
DISTRIBUTION_STATUS_IN_PROGRESS = "in_progress"
DISTRIBUTION_STATUS_COMPLETED = "completed"
DISTRIBUTION_STATUS_CANCELLED = "cancelled"

DistributionStatus = Literal["pending", "in_progress", "completed", "cancelled"]
DISTRIBUTION_STATUSES = frozenset(
    {
        DISTRIBUTION_STATUS_PENDING,
        DISTRIBUTION_STATUS_IN_PROGRESS,
        DISTRIBUTION_STATUS_COMPLETED,
        DISTRIBUTION_STATUS_CANCELLED,
    }
)


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class DistributionLocationDoc(MongoBaseModel):
    """Document model for the `distribution-locations` collection."""

    name: str
    type: LocationType
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    totes_count: int = Field(default=0, ge=0)
    is_active: bool = True
    opening_hours: Optional[str] = None
    distribution_instructions: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LocationAllocation(BaseModel):
    """One entry of PhysicalDistributionDoc.distribution_locations."""

    location: PyObjectId
    quantity: int = Field(ge=1)
    status: DistributionStatus = DISTRIBUTION_STATUS_PENDING
    notes: Optional[str] = None
    distributed_date: Optional[datetime] = None


class PhysicalDistributionDoc(MongoBaseModel):
    """Document model for the `physical-distributions` collection."""

    sponsorship: PyObjectId
    shipping_address: str
    shipping_city: str
    shipping_state: str
    shipping_zip_code: str
    shipping_contact_name: str
    shipping_phone: str
    shipping_email: Optional[str] = None
    shipping_instructions: Optional[str] = None
    tracking_number: Optional[str] = None
    shipping_provider: Optional[str] = None
    estimated_delivery_date: Optional[datetime] = None
    actual_delivery_date: Optional[datetime] = None
    delivery_confirmation: bool = False
    distribution_locations: list[LocationAllocation] = []
    status: DistributionStatus = DISTRIBUTION_STATUS_PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def allocated_total(self) -> int:
        return sum(entry.quantity for entry in self.distribution_locations)
