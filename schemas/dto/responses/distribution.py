"""
Response DTOs for physical distributions and distribution locations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.dto.base import CamelModel, DocResponse


class CoordinatesResponse(CamelModel):
    latitude: float
    longitude: float


class LocationResponse(DocResponse):
    id: str = Field(alias="_id")
    name: str
    type: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    totes_count: int
    is_active: bool
    opening_hours: Optional[str] = None
    distribution_instructions: Optional[str] = None
    coordinates: Optional[CoordinatesResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LocationListResponse(CamelModel):
    count: int
    data: list[LocationResponse]


class LocationAllocationResponse(CamelModel):
    location: str
    quantity: int
    status: str
    notes: Optional[str] = None
    distributed_date: Optional[datetime] = None


class DistributionResponse(DocResponse):
    id: str = Field(alias="_id")
    sponsorship: str
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
    delivery_confirmation: bool
    distribution_locations: list[LocationAllocationResponse]
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LocationCountCorrection(CamelModel):
    location: str
    previous: int
    corrected: int


class ReconcileResponse(CamelModel):
    checked: int
    corrections: list[LocationCountCorrection]
