"""
Claim document model.

Maps to the `claims` MongoDB collection.

Status lifecycle:

    pending  -> verified | cancelled
    verified -> shipped | cancelled
    shipped  -> delivered
    delivered, cancelled: terminal

Only verified/shipped/delivered claims count against a cause's tote pool.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from schemas.models.base import MongoBaseModel, PyObjectId

CLAIM_STATUS_PENDING = "pending"
CLAIM_STATUS_VERIFIED = "verified"
CLAIM_STATUS_SHIPPED = "shipped"
CLAIM_STATUS_DELIVERED = "delivered"
CLAIM_STATUS_CANCELLED = "cancelled"

ClaimStatus = Literal["pending", "verified", "shipped", "delivered", "cancelled"]

CLAIM_STATUSES = frozenset(
    {
        CLAIM_STATUS_PENDING,
        CLAIM_STATUS_VERIFIED,
        CLAIM_STATUS_SHIPPED,
        CLAIM_STATUS_DELIVERED,
        CLAIM_STATUS_CANCELLED,
    }
)

# Statuses that consume a tote from the cause's pool
COUNTED_CLAIM_STATUSES = (
    CLAIM_STATUS_VERIFIED,
    CLAIM_STATUS_SHIPPED,
    CLAIM_STATUS_DELIVERED,
)

CLAIM_TRANSITIONS: dict[str, frozenset[str]] = {
    CLAIM_STATUS_PENDING: frozenset({CLAIM_STATUS_VERIFIED, CLAIM_STATUS_CANCELLED}),
    CLAIM_STATUS_VERIFIED: frozenset({CLAIM_STATUS_SHIPPED, CLAIM_STATUS_CANCELLED}),
    CLAIM_STATUS_SHIPPED: frozenset({CLAIM_STATUS_DELIVERED}),
    CLAIM_STATUS_DELIVERED: frozenset(),
    CLAIM_STATUS_CANCELLED: frozenset(),
}


class ClaimDoc(MongoBaseModel):
    """Document model for the `claims` collection."""

    cause_id: PyObjectId
    cause_title: str
    full_name: str
    email: str
    phone: str
    purpose: str
    address: str
    city: str
    state: str
    zip_code: str
    status: ClaimStatus = CLAIM_STATUS_PENDING
    email_verified: bool = False
    shipping_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def counts_against_pool(self) -> bool:
        return self.status in COUNTED_CLAIM_STATUSES
