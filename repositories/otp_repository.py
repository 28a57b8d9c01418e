"""Repository for the `otp-verifications` collection."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from bson import ObjectId

from repositories.base import BaseRepository
from schemas.models.otp import OTP_TYPE_EMAIL, OTPVerificationDoc


class OTPRepository(BaseRepository[OTPVerificationDoc]):
    collection_name = "otp-verifications"
    model = OTPVerificationDoc

    async def find_recent_live(
        self, email: str, *, now: datetime, created_after: datetime
    ) -> Optional[OTPVerificationDoc]:
        """Return an unexpired, unconsumed record created after *created_after*."""
        doc = await self._col.find_one(
            {
                "email": email,
                "type": OTP_TYPE_EMAIL,
                "verified": False,
                "expires_at": {"$gt": now},
                "created_at": {"$gt": created_after},
            }
        )
        return self._to_model(doc)

    async def list_for_email(self, email: str) -> list[OTPVerificationDoc]:
        return await self.find_many(
            {"email": email, "type": OTP_TYPE_EMAIL}, sort=[("created_at", 1)]
        )

    async def mark_verified(self, record_id: ObjectId) -> bool:
        """Flip ``verified`` to True; False when another request got there first."""
        result = await self._col.update_one(
            {"_id": record_id, "verified": False}, {"$set": {"verified": True}}
        )
        return result.modified_count == 1
