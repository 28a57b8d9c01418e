"""
Response DTOs for OTP endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class OTPResponse(BaseModel):
    """Body for POST /api/otp/send and a successful POST /api/otp/verify."""

    message: str
    email: str
