"""
OTP verification document model.

Maps to the `otp-verifications` MongoDB collection.

otp_hash stores SHA-256(otp_code); the plain code is never stored.
verified flips to True exactly once, when a valid unexpired code is matched.
A TTL index on created_at purges every record 10 minutes after creation,
whatever its outcome.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from schemas.models.base import MongoBaseModel

OTP_TYPE_EMAIL = "email"
OTP_TYPE_PHONE = "phone"


class OTPVerificationDoc(MongoBaseModel):
    """Document model for the `otp-verifications` collection."""

    email: Optional[str] = None
    phone: Optional[str] = None
    otp_hash: str
    expires_at: datetime
    verified: bool = False
    type: Literal["email", "phone"] = OTP_TYPE_EMAIL
    created_at: datetime
