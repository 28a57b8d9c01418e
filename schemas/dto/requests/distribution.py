"""
Request DTOs for physical distributions and distribution locations.

CreateDistributionRequest     — POST  /api/physical-distributions
UpdateDistributionRequest     — PUT   /api/physical-distributions/{id}
UpdateLocationStatusRequest   — PATCH /api/physical-distributions/{id}/locations/{location_id}/status
CreateLocationRequest         — POST  /api/distribution-locations
UpdateLocationRequest         — PUT   /api/distribution-locations/{id}
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from schemas.dto.base import CamelModel


class LocationAllocationRequest(CamelModel):
    location: str
    quantity: int = Field(ge=1)
    notes: Optional[str] = None
    status: Optional[Literal["pending", "in_progress", "completed", "cancelled"]] = None


class CreateDistributionRequest(CamelModel):
    sponsorship_id: str
    shipping_address: str = Field(min_length=1)
    shipping_city: str = Field(min_length=1)
    shipping_state: str = Field(min_length=1)
    shipping_zip_code: str = Field(min_length=1)
    shipping_contact_name: str = Field(min_length=1)
    shipping_phone: str = Field(min_length=1)
    shipping_email: Optional[EmailStr] = None
    shipping_instructions: Optional[str] = None
    distribution_locations: list[LocationAllocationRequest] = Field(min_length=1)


class UpdateDistributionRequest(CamelModel):
    """Partial update. Supplying ``distribution_locations`` replaces the list."""

    shipping_address: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_state: Optional[str] = None
    shipping_zip_code: Optional[str] = None
    shipping_contact_name: Optional[str] = None
    shipping_phone: Optional[str] = None
    shipping_email: Optional[EmailStr] = None
    shipping_instructions: Optional[str] = None
    tracking_number: Optional[str] = None
    shipping_provider: Optional[str] = None
    estimated_delivery_date: Optional[datetime] = None
    actual_delivery_date: Optional[datetime] = None
    delivery_confirmation: Optional[bool] = None
    distribution_locations: Optional[list[LocationAllocationRequest]] = None


class UpdateLocationStatusRequest(CamelModel):
    status: str
    notes: Optional[str] = None
    distributed_date: Optional[datetime] = None


class CoordinatesRequest(CamelModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class CreateLocationRequest(CamelModel):
    name: str = Field(min_length=1)
    type: Literal["mall", "metro_station", "airport", "school", "other"]
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    is_active: bool = True
    opening_hours: Optional[str] = None
    distribution_instructions: Optional[str] = None
    coordinates: Optional[CoordinatesRequest] = None


class UpdateLocationRequest(CamelModel):
    """Partial update. totes_count is not writable here; it follows allocations."""

    name: Optional[str] = None
    type: Optional[Literal["mall", "metro_station", "airport", "school", "other"]] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    is_active: Optional[bool] = None
    opening_hours: Optional[str] = None
    distribution_instructions: Optional[str] = None
    coordinates: Optional[CoordinatesRequest] = None
