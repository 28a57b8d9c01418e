"""
Cause document model.

Maps to the `causes` MongoDB collection.

current_amount is a cache of the sum of approved sponsorship amounts; it is
rewritten by the funding aggregator and never edited directly. Tote totals
are not stored here at all.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from schemas.models.base import MongoBaseModel, PyObjectId

CAUSE_STATUS_PENDING = "pending"
CAUSE_STATUS_APPROVED = "approved"
CAUSE_STATUS_COMPLETED = "completed"
CAUSE_STATUS_REJECTED = "rejected"

CauseStatus = Literal["pending", "approved", "completed", "rejected"]
CAUSE_STATUSES = frozenset(
    {
        CAUSE_STATUS_PENDING,
        CAUSE_STATUS_APPROVED,
        CAUSE_STATUS_COMPLETED,
        CAUSE_STATUS_REJECTED,
    }
)


class CauseDoc(MongoBaseModel):
    """Document model for the `causes` collection."""

    title: str
    description: str
    image_url: str = ""
    target_amount: float = Field(ge=0)
    current_amount: float = Field(default=0, ge=0)
    creator: PyObjectId
    status: CauseStatus = CAUSE_STATUS_PENDING
    start_date: Optional[datetime] = None
    location: Optional[str] = None
    category: str
    is_online: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
