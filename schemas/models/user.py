"""
User document model.

Maps to the `users` MongoDB collection.

role values: admin | sponsor | claimer | user. The role only drives
authorization checks; there is no behaviour attached to it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from schemas.models.base import MongoBaseModel

ROLE_ADMIN = "admin"
ROLE_SPONSOR = "sponsor"
ROLE_CLAIMER = "claimer"
ROLE_USER = "user"

UserRole = Literal["admin", "sponsor", "claimer", "user"]


class UserDoc(MongoBaseModel):
    """Document model for the `users` collection."""

    email: str
    password_hash: str
    role: UserRole = ROLE_USER
    name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
